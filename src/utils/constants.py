from enum import Enum


class UserRole(str, Enum):
    ROOT = "root"
    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, value: "str | UserRole | None") -> "UserRole":
        """Map an identity's role string onto a known role.

        Matching is case-insensitive. Anything unrecognised is a regular user.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.USER

    @property
    def can_see_all_institutions(self) -> bool:
        return self in (UserRole.ROOT, UserRole.ADMIN)


class InventoryStatus(str, Enum):
    OPERATIVE = "Operativo"
    INOPERATIVE = "Inoperativo"
    UNDER_REPAIR = "En reparación"
    OUT_OF_SERVICE = "Fuera de servicio"
    DAMAGED = "Dañado"


INOPERATIVE_STATUSES = (
    InventoryStatus.INOPERATIVE.value,
    InventoryStatus.UNDER_REPAIR.value,
    InventoryStatus.OUT_OF_SERVICE.value,
    InventoryStatus.DAMAGED.value,
)
