from typing import TYPE_CHECKING

from sqlalchemy import String, ForeignKey, Integer
from sqlalchemy.orm import relationship, mapped_column, Mapped

from user_directory.core.models import Base

if TYPE_CHECKING:
    from user_directory.api.v1.models.users import User


class UserRole(Base):
    """
    One role granted to a user. A user's roles form an ordered list, so the
    same role string may appear more than once.
    """
    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    role: Mapped[str] = mapped_column(String(100), nullable=False)

    user: Mapped["User"] = relationship(back_populates="role_entries")

    def __repr__(self):
        return f"<UserRole(User ID='{self.user_id}', role='{self.role}', position={self.position})>"
