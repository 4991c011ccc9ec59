"""User CRUD helpers"""

from typing import Optional
from sqlalchemy.orm import Session

from app.crud.base import BaseCRUD
from app.models.user import User
from app.schemas import UserCreate, UserUpdate


class UserCRUD(BaseCRUD[User, UserCreate, UserUpdate]):
    def get_by_name(self, db: Session, name: str) -> Optional[User]:
        """Return a user by their unique host name."""
        return db.query(User).filter(User.name == name).first()


user_crud = UserCRUD(User)
