from sqlalchemy import select, func

from vulms.extensions import db
from vulms.models.user import User


class UserRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get_by_id(self, user_id: int):
        return self.session.get(User, user_id)

    def get_by_username(self, username: str):
        return self.session.scalar(select(User).filter_by(username=username))

    def get_by_email(self, email: str):
        return self.session.scalar(select(User).filter_by(email=email))

    def lock(self, user_id: int):
        # serializes concurrent borrows of one user on engines with row locks
        return self.session.scalar(select(User).where(User.id == user_id).with_for_update())

    def count_by_role(self, role: str) -> int:
        return self.session.scalar(select(func.count(User.id)).where(User.role == role))

    def create(self, user: User):
        self.session.add(user)
        self.session.commit()
        return user
