from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import BaseModel
from src.utils.constants import UserRole


class User(BaseModel):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # Role names are an open set owned by the user directory
    role: Mapped[str] = mapped_column(String(50), default=UserRole.USER.value)

    # Relationships
    inventoried: Mapped[list["InventoryRecord"]] = relationship(  # noqa: F821
        back_populates="inventory_taker"
    )
