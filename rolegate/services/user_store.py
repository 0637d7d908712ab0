"""User store: the storage contract used by RoleService and its SQLAlchemy implementation."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rolegate.models import User

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    """Raised when no user exists for the requested id."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.message = f"User {user_id} not found"
        super().__init__(self.message)


class EmailAlreadyExistsError(Exception):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        self.message = "A user with this email already exists"
        super().__init__(self.message)


class UserStore(Protocol):
    """Read/write access to user records needed by role transitions."""

    def get_by_id(self, user_id: int) -> User:
        """Return the user or raise UserNotFoundError."""
        ...

    def update_role(self, user_id: int, role: str) -> User:
        """Persist a new role and return the updated user."""
        ...

    def list_by_role(self, role: str) -> list[User]:
        """Return users holding exactly this role, ordered by id."""
        ...


class SqlAlchemyUserStore:
    """UserStore backed by a SQLAlchemy session. Commits on every write."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def list_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def list_by_role(self, role: str) -> list[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.id).all()

    def create(self, name: str, email: str, password_hash: str, role: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailAlreadyExistsError(email) from e
        self.db.refresh(user)
        logger.info("User created", extra={"user_id": user.id, "role": role})
        return user

    def update_role(self, user_id: int, role: str) -> User:
        user = self.get_by_id(user_id)
        user.role = role
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def update_name(self, user_id: int, name: str) -> User:
        user = self.get_by_id(user_id)
        user.name = name
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        user = self.get_by_id(user_id)
        self.db.delete(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("User deleted", extra={"user_id": user_id})
