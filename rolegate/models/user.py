"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from rolegate.core.roles import Role
from rolegate.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: one of 'admin', 'moderator', 'user'. Changed only through RoleService.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'moderator', 'user')",
            name="ck_users_role_valid",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
