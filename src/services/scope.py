import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import InternalServerError
from src.models.catalog import Institution
from src.models.inventory import InventoryRecord
from src.utils.constants import UserRole

logger = logging.getLogger(__name__)


async def resolve_scope(db: AsyncSession, user_id: int, role: str | UserRole) -> set[int]:
    """Return the ids of the institutions visible to ``user_id``.

    Privileged roles see every institution. Everybody else only sees the
    institutions where they have inventoried at least one pump.
    """
    role = UserRole.parse(role)
    if role.can_see_all_institutions:
        query = select(Institution.id)
    else:
        query = (
            select(InventoryRecord.institution_id)
            .where(InventoryRecord.inventory_taker_id == user_id)
            .distinct()
        )

    try:
        result = await db.execute(query)
    except SQLAlchemyError as exc:
        raise InternalServerError(details=str(exc)) from exc

    scope = set(result.scalars().all())
    logger.debug("User %s (%s) can see %d institutions", user_id, role.value, len(scope))
    return scope
