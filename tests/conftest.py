from collections.abc import AsyncGenerator, Callable, Generator
from datetime import date
from typing import Any

import pytest
import pytest_asyncio
from dateutil.relativedelta import relativedelta
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.core.dependencies import get_db
from src.core.security import create_access_token
from src.database import Base
from src.main import app
from src.models.catalog import EquipmentModel, Institution, Service
from src.models.inventory import InventoryRecord
from src.models.user import User
from src.utils.constants import InventoryStatus, UserRole

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_inventory.db"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def headers_for() -> Callable[[int, str], dict[str, str]]:
    def _headers(user_id: int, role: str) -> dict[str, str]:
        token = create_access_token({"sub": str(user_id), "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def executed_statements() -> Generator[list[str], None, None]:
    """Collect the SQL statements sent to the test database."""
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", record)
    yield statements
    event.remove(test_engine.sync_engine, "before_cursor_execute", record)


@pytest_asyncio.fixture
async def inventory_data(db_session: AsyncSession) -> dict[str, Any]:
    """Two hospitals with pumps, one empty clinic, two takers and an admin.

    Hospital A (taker Ana): ModelX/UCI, ModelX/Emergencia, ModelY/UCI (last year)
    Hospital B (taker Luis): ModelX/UCI, ModelY/UCI, ModelX/Emergencia
    """
    today = date.today()
    last_year = date(today.year - 1, 6, 1)

    hospital_a = Institution(name="Hospital A")
    hospital_b = Institution(name="Hospital B")
    clinic_c = Institution(name="Clínica C")
    model_x = EquipmentModel(name="ModelX")
    model_y = EquipmentModel(name="ModelY")
    icu = Service(name="UCI")
    emergency = Service(name="Emergencia")
    db_session.add_all([hospital_a, hospital_b, clinic_c, model_x, model_y, icu, emergency])

    admin = User(
        first_name="Admin", last_name="Root", email="admin@example.com", role=UserRole.ADMIN.value
    )
    ana = User(first_name="Ana", last_name="Pérez", email="ana@example.com", role="user")
    luis = User(first_name="Luis", last_name="Gómez", email="luis@example.com", role="user")
    idle = User(first_name="Idle", last_name="User", email="idle@example.com", role="user")
    db_session.add_all([admin, ana, luis, idle])
    await db_session.flush()

    def record(serial, institution, model, service, taker, inventory_date, status, maintenance):
        return InventoryRecord(
            serial_number=serial,
            qr_code=f"QR-{serial}",
            institution_id=institution.id,
            model_id=model.id,
            service_id=service.id,
            inventory_taker_id=taker.id,
            inventory_date=inventory_date,
            status=status,
            last_maintenance_date=maintenance,
        )

    db_session.add_all(
        [
            record(
                "A-001", hospital_a, model_x, icu, ana, today,
                InventoryStatus.OPERATIVE.value, today - relativedelta(years=1),
            ),
            record(
                "A-002", hospital_a, model_x, emergency, ana, today,
                InventoryStatus.OPERATIVE.value, None,
            ),
            record(
                "A-003", hospital_a, model_y, icu, ana, last_year,
                InventoryStatus.INOPERATIVE.value, today - relativedelta(months=6),
            ),
            record(
                "B-001", hospital_b, model_x, icu, luis, today,
                InventoryStatus.DAMAGED.value, today - relativedelta(years=3),
            ),
            record(
                "B-002", hospital_b, model_y, icu, luis, today,
                InventoryStatus.UNDER_REPAIR.value, today - relativedelta(months=1),
            ),
            record(
                "B-003", hospital_b, model_x, emergency, luis, today,
                InventoryStatus.OPERATIVE.value, today - relativedelta(years=1),
            ),
        ]
    )
    await db_session.commit()

    return {
        "institutions": {"a": hospital_a, "b": hospital_b, "c": clinic_c},
        "models": {"x": model_x, "y": model_y},
        "services": {"icu": icu, "emergency": emergency},
        "users": {"admin": admin, "ana": ana, "luis": luis, "idle": idle},
    }
