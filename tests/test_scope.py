from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import InternalServerError
from src.models.catalog import Institution
from src.models.inventory import InventoryRecord
from src.services.scope import resolve_scope
from src.utils.constants import UserRole


class BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT id FROM institutions", {}, Exception("Connection lost"))


@pytest.mark.asyncio
async def test_admin_sees_every_institution(db_session: AsyncSession, inventory_data: dict):
    institutions = inventory_data["institutions"]
    admin = inventory_data["users"]["admin"]

    scope = await resolve_scope(db_session, admin.id, "admin")

    # The clinic has no pumps but still belongs to the admin scope
    assert scope == {institutions["a"].id, institutions["b"].id, institutions["c"].id}


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["ROOT", "Admin", UserRole.ROOT])
async def test_privileged_scope_ignores_user_id(
    db_session: AsyncSession, inventory_data: dict, role
):
    scope = await resolve_scope(db_session, 999_999, role)
    assert len(scope) == 3


@pytest.mark.asyncio
async def test_regular_user_sees_institutions_they_inventoried(
    db_session: AsyncSession, inventory_data: dict
):
    institutions = inventory_data["institutions"]
    users = inventory_data["users"]

    assert await resolve_scope(db_session, users["ana"].id, "user") == {institutions["a"].id}
    assert await resolve_scope(db_session, users["luis"].id, "user") == {institutions["b"].id}


@pytest.mark.asyncio
async def test_unknown_role_is_treated_as_regular(db_session: AsyncSession, inventory_data: dict):
    ana = inventory_data["users"]["ana"]
    scope = await resolve_scope(db_session, ana.id, "supervisor")
    assert scope == {inventory_data["institutions"]["a"].id}


@pytest.mark.asyncio
async def test_user_without_activity_has_empty_scope(
    db_session: AsyncSession, inventory_data: dict
):
    idle = inventory_data["users"]["idle"]
    assert await resolve_scope(db_session, idle.id, "user") == set()


@pytest.mark.asyncio
async def test_new_record_extends_scope(db_session: AsyncSession, inventory_data: dict):
    institutions = inventory_data["institutions"]
    ana = inventory_data["users"]["ana"]

    db_session.add(
        InventoryRecord(
            serial_number="C-001",
            institution_id=institutions["c"].id,
            model_id=inventory_data["models"]["x"].id,
            service_id=inventory_data["services"]["icu"].id,
            inventory_taker_id=ana.id,
            inventory_date=date.today(),
            status="Operativo",
        )
    )
    await db_session.commit()

    scope = await resolve_scope(db_session, ana.id, "user")
    assert scope == {institutions["a"].id, institutions["c"].id}


@pytest.mark.asyncio
async def test_admin_scope_empty_without_institutions(db_session: AsyncSession):
    assert await resolve_scope(db_session, 1, "admin") == set()

    db_session.add(Institution(name="Hospital Nuevo"))
    await db_session.commit()
    assert len(await resolve_scope(db_session, 1, "admin")) == 1


@pytest.mark.asyncio
async def test_query_failure_raises_internal_error():
    with pytest.raises(InternalServerError) as exc_info:
        await resolve_scope(BrokenSession(), 1, "user")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Error interno del servidor"
    assert "Connection lost" in exc_info.value.details
