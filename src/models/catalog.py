from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import BaseModel


class Institution(BaseModel):
    __tablename__ = "institutions"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    inventory: Mapped[list["InventoryRecord"]] = relationship(  # noqa: F821
        back_populates="institution"
    )


class EquipmentModel(BaseModel):
    __tablename__ = "models"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True)

    inventory: Mapped[list["InventoryRecord"]] = relationship(  # noqa: F821
        back_populates="model"
    )


class Service(BaseModel):
    __tablename__ = "services"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))

    inventory: Mapped[list["InventoryRecord"]] = relationship(  # noqa: F821
        back_populates="service"
    )
