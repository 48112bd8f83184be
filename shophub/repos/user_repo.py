from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from shophub.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def exists(self, username: str, email: str) -> bool:
        found = self.db.execute(
            select(UserModel.id).where(or_(UserModel.username == username, UserModel.email == email))
        ).first()
        return found is not None

    def count(self) -> int:
        return self.db.execute(select(func.count(UserModel.id))).scalar_one()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
