from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from vulms.errors import InvalidCredentials, ValidationError
from vulms.models.user import User, ROLES
from vulms.repositories.user_repo import UserRepo


class AuthService:
    def __init__(self, session=None):
        self.users = UserRepo(session)

    def register(self, username: str, email: str, password: str, role: str = "student"):
        if not username or not email or not password:
            raise ValidationError("All fields are required")

        role = role or "student"
        if role not in ROLES:
            raise ValidationError(f"Unknown role '{role}'")
        if role == "admin" and not current_app.config.get("ALLOW_ADMIN_SIGNUP", False):
            raise ValidationError("Admin accounts cannot be created through signup")

        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        try:
            self.users.create(user)
        except IntegrityError:
            self.users.session.rollback()
            raise ValidationError("Username or email already exists")

        current_app.logger.info(f"[auth] registered user={user.id} role={role}")
        return user

    def authenticate(self, email: str, password: str):
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.users.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise InvalidCredentials()
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "username": user.username},
        )
