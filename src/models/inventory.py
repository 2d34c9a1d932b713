from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import BaseModel
from src.utils.constants import InventoryStatus


class InventoryRecord(BaseModel):
    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(primary_key=True)
    serial_number: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    qr_code: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model_id: Mapped[int] = mapped_column(ForeignKey("models.id"), index=True)
    institution_id: Mapped[int] = mapped_column(ForeignKey("institutions.id"), index=True)
    service_id: Mapped[int] = mapped_column(ForeignKey("services.id"), index=True)
    inventory_taker_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    inventory_date: Mapped[date] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(50), default=InventoryStatus.OPERATIVE.value)
    last_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    model: Mapped["EquipmentModel"] = relationship(back_populates="inventory")  # noqa: F821
    institution: Mapped["Institution"] = relationship(back_populates="inventory")  # noqa: F821
    service: Mapped["Service"] = relationship(back_populates="inventory")  # noqa: F821
    inventory_taker: Mapped["User | None"] = relationship(  # noqa: F821
        back_populates="inventoried"
    )
