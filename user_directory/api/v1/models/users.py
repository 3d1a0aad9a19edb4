from typing import List, Optional

from sqlalchemy import String
from sqlalchemy.ext.associationproxy import association_proxy, AssociationProxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from user_directory.core.models import Base
from user_directory.api.v1.models.user_role import UserRole


class User(Base):
    """Core application user model."""
    __tablename__ = "users"

    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # Role rows, kept in insertion order and removed together with the user
    role_entries: Mapped[List["UserRole"]] = relationship(
        back_populates="user",
        order_by="UserRole.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # Plain list[str] view over role_entries
    roles: AssociationProxy[List[str]] = association_proxy(
        "role_entries", "role", creator=lambda role: UserRole(role=role)
    )

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
