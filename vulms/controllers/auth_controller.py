from flask import Blueprint, jsonify

from vulms.errors import LibraryError, AuthRequired
from vulms.repositories.user_repo import UserRepo
from vulms.services.auth_service import AuthService
from vulms.utils.auth import current_identity, login_session, logout_session
from vulms.utils.payload import json_body, text_field, json_error

auth_bp = Blueprint("auth", __name__)


def _credentials():
    data = json_body()
    return text_field(data, "email"), text_field(data, "password", strip=False)


@auth_bp.post("/signup")
def signup():
    try:
        data = json_body()
        user = AuthService().register(
            username=text_field(data, "username"),
            email=text_field(data, "email"),
            password=text_field(data, "password", strip=False),
            role=text_field(data, "role") or "student",
        )
    except LibraryError as e:
        return json_error(e)
    return jsonify({"message": "Registration successful", "userId": user.id})


@auth_bp.post("/login")
def login():
    """
    Session login for the web client.
    Body: { "email": "...", "password": "..." }
    """
    try:
        user = AuthService().authenticate(*_credentials())
    except LibraryError as e:
        return json_error(e)

    login_session(user)
    return jsonify({"message": "Login successful", "user": user.to_dict()})


@auth_bp.post("/token")
def token():
    """Bearer token login for API clients; same credentials as /login."""
    service = AuthService()
    try:
        user = service.authenticate(*_credentials())
    except LibraryError as e:
        return json_error(e)
    return jsonify({"access_token": service.issue_token(user), "user": user.to_dict()})


@auth_bp.post("/logout")
def logout():
    logout_session()
    return jsonify({"message": "Logout successful"})


@auth_bp.get("/session")
def current_session():
    identity = current_identity()
    if identity is None:
        return json_error(AuthRequired("Not authenticated"))

    user = UserRepo().get_by_id(identity.user_id)
    if user is None:
        logout_session()
        return json_error(AuthRequired("Not authenticated"))
    return jsonify({"user": user.to_dict()})
