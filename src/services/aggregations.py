import logging
from datetime import date

from dateutil.relativedelta import relativedelta
from sqlalchemy import case, distinct, extract, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.models.catalog import EquipmentModel, Institution, Service
from src.models.inventory import InventoryRecord
from src.models.user import User
from src.schemas.dashboard import (
    AdminSummaryData,
    DashboardSummary,
    InstitutionOverdueMaintenance,
    InstitutionProgress,
    InstitutionServiceProgress,
    InstitutionServiceState,
    InventoryProgressByInstitution,
    InventoryProgressByService,
    InventoryTaker,
    ModelCount,
    ModelDistribution,
    ModelDistributionByInstitution,
    ModelState,
    OverdueMaintenanceSummary,
    StateByModel,
    StateByService,
    TopInventoryTakers,
)
from src.services.scope import resolve_scope
from src.services.shaping import group_services_by_institution, pivot_model_counts
from src.utils.constants import INOPERATIVE_STATUSES, InventoryStatus, UserRole

logger = logging.getLogger(__name__)


def current_year() -> int:
    return date.today().year


def overdue_cutoff() -> date:
    return date.today() - relativedelta(years=settings.overdue_maintenance_years)


def _count_if(condition):
    return func.count(case((condition, 1)))


def _inventoried_this_year(year: int):
    return _count_if(extract("year", InventoryRecord.inventory_date) == year)


def _overdue_maintenance():
    return _count_if(
        or_(
            InventoryRecord.last_maintenance_date < overdue_cutoff(),
            InventoryRecord.last_maintenance_date.is_(None),
        )
    )


def _inoperative():
    return _count_if(InventoryRecord.status.in_(INOPERATIVE_STATUSES))


def _in_scope(scope: set[int]):
    return InventoryRecord.institution_id.in_(sorted(scope))


async def get_summary(db: AsyncSession, user_id: int, role: str | UserRole) -> DashboardSummary:
    role = UserRole.parse(role)
    scope = await resolve_scope(db, user_id, role)

    if not scope:
        summary = DashboardSummary()
        if role.can_see_all_institutions:
            summary.admin_data = AdminSummaryData()
        return summary

    query = select(
        func.count(InventoryRecord.id).label("total_pumps"),
        _inventoried_this_year(current_year()).label("inventoried_pumps_this_year"),
        _count_if(InventoryRecord.status == InventoryStatus.OPERATIVE.value).label(
            "operative_pumps"
        ),
        _overdue_maintenance().label("overdue_pumps_maintenance"),
    ).where(_in_scope(scope))
    result = await db.execute(query)
    summary = DashboardSummary.model_validate(dict(result.mappings().one()))

    if role.can_see_all_institutions:
        # Administrative overview: counted over the whole inventory, not the scope
        result = await db.execute(
            select(func.count(distinct(InventoryRecord.inventory_taker_id)))
        )
        total_inventory_takers = result.scalar() or 0

        result = await db.execute(select(func.count(distinct(InventoryRecord.institution_id))))
        total_institutions = result.scalar() or 0

        summary.admin_data = AdminSummaryData(
            total_inventory_takers=total_inventory_takers,
            total_institutions=total_institutions,
        )

    return summary


async def get_model_distribution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> ModelDistribution:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return ModelDistribution(models=[])

    count = func.count(InventoryRecord.id).label("count")
    query = (
        select(EquipmentModel.name.label("model_name"), count)
        .select_from(InventoryRecord)
        .join(EquipmentModel, InventoryRecord.model_id == EquipmentModel.id)
        .where(_in_scope(scope))
        .group_by(EquipmentModel.id, EquipmentModel.name)
        .order_by(count.desc(), EquipmentModel.name)
    )
    result = await db.execute(query)
    return ModelDistribution(
        models=[ModelCount.model_validate(dict(row)) for row in result.mappings().all()]
    )


async def get_model_distribution_by_institution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> ModelDistributionByInstitution:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return ModelDistributionByInstitution(total_pumps=0, models=[], data=[])

    count = func.count(InventoryRecord.id).label("count")
    query = (
        select(
            Institution.name.label("institution_name"),
            EquipmentModel.name.label("model_name"),
            count,
        )
        .select_from(InventoryRecord)
        .join(Institution, InventoryRecord.institution_id == Institution.id)
        .join(EquipmentModel, InventoryRecord.model_id == EquipmentModel.id)
        .where(_in_scope(scope))
        .group_by(Institution.id, Institution.name, EquipmentModel.id, EquipmentModel.name)
        .order_by(Institution.name, count.desc())
    )
    result = await db.execute(query)
    models, data = pivot_model_counts(result.mappings().all())

    result = await db.execute(select(func.count(InventoryRecord.id)).where(_in_scope(scope)))
    total_pumps = result.scalar() or 0

    return ModelDistributionByInstitution(total_pumps=total_pumps, models=models, data=data)


async def get_inventory_progress_by_institution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> InventoryProgressByInstitution:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return InventoryProgressByInstitution(institutions=[])

    query = (
        select(
            Institution.name.label("institution_name"),
            _inventoried_this_year(current_year()).label("pumps_inventoried_this_year"),
            func.count(InventoryRecord.id).label("total_pumps"),
        )
        .select_from(InventoryRecord)
        .join(Institution, InventoryRecord.institution_id == Institution.id)
        .where(_in_scope(scope))
        .group_by(Institution.id, Institution.name)
        .order_by(Institution.name)
    )
    result = await db.execute(query)
    return InventoryProgressByInstitution(
        institutions=[
            InstitutionProgress.model_validate(dict(row)) for row in result.mappings().all()
        ]
    )


def _by_institution_and_service(scope: set[int], *metrics):
    return (
        select(
            Institution.id.label("institution_id"),
            Institution.name.label("institution_name"),
            Service.id.label("service_id"),
            Service.name.label("service_name"),
            *metrics,
            func.count(InventoryRecord.id).label("total_pumps"),
        )
        .select_from(InventoryRecord)
        .join(Institution, InventoryRecord.institution_id == Institution.id)
        .join(Service, InventoryRecord.service_id == Service.id)
        .where(_in_scope(scope))
        .group_by(Institution.id, Institution.name, Service.id, Service.name)
        .order_by(Institution.name, Service.name)
    )


async def get_inventory_progress_by_service(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> InventoryProgressByService:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return InventoryProgressByService(institutions=[])

    query = _by_institution_and_service(
        scope, _inventoried_this_year(current_year()).label("pumps_inventoried_this_year")
    )
    result = await db.execute(query)
    institutions = group_services_by_institution(
        result.mappings().all(), ("pumps_inventoried_this_year", "total_pumps")
    )
    return InventoryProgressByService(
        institutions=[InstitutionServiceProgress.model_validate(i) for i in institutions]
    )


async def get_state_by_service(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> StateByService:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return StateByService(institutions=[])

    query = _by_institution_and_service(scope, _inoperative().label("inoperative_pumps_count"))
    result = await db.execute(query)
    institutions = group_services_by_institution(
        result.mappings().all(), ("inoperative_pumps_count", "total_pumps")
    )
    return StateByService(
        institutions=[InstitutionServiceState.model_validate(i) for i in institutions]
    )


async def get_state_by_model(db: AsyncSession, user_id: int, role: str | UserRole) -> StateByModel:
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return StateByModel(models=[])

    inoperative = _inoperative().label("inoperative_pumps")
    query = (
        select(
            EquipmentModel.name.label("model_name"),
            inoperative,
            func.count(InventoryRecord.id).label("total_pumps"),
        )
        .select_from(InventoryRecord)
        .join(EquipmentModel, InventoryRecord.model_id == EquipmentModel.id)
        .where(_in_scope(scope))
        .group_by(EquipmentModel.id, EquipmentModel.name)
        .order_by(inoperative.desc(), EquipmentModel.name)
    )
    result = await db.execute(query)
    return StateByModel(
        models=[ModelState.model_validate(dict(row)) for row in result.mappings().all()]
    )


async def get_top_inventory_takers(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> TopInventoryTakers:
    role = UserRole.parse(role)
    year = current_year()
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return TopInventoryTakers(top_inventory_takers=[], year=year)

    pumps = func.count(InventoryRecord.id).label("pumps_inventoried_this_year")
    query = (
        select(
            User.id.label("user_id"),
            (User.first_name + " " + User.last_name).label("inventory_taker_name"),
            pumps,
        )
        .select_from(InventoryRecord)
        .join(User, InventoryRecord.inventory_taker_id == User.id)
        .where(extract("year", InventoryRecord.inventory_date) == year)
        .group_by(User.id, User.first_name, User.last_name)
    )
    if role.can_see_all_institutions:
        query = query.order_by(pumps.desc(), User.first_name, User.last_name)
    else:
        query = query.where(User.id == user_id)

    result = await db.execute(query)
    return TopInventoryTakers(
        top_inventory_takers=[
            InventoryTaker.model_validate(dict(row)) for row in result.mappings().all()
        ],
        year=year,
    )


async def get_overdue_maintenance_summary(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> OverdueMaintenanceSummary:
    role = UserRole.parse(role)
    scope = await resolve_scope(db, user_id, role)
    if not scope:
        return OverdueMaintenanceSummary(institutions=[])

    overdue = _overdue_maintenance()
    query = (
        select(
            Institution.name.label("institution_name"),
            overdue.label("overdue_maintenance_count"),
        )
        .select_from(InventoryRecord)
        .join(Institution, InventoryRecord.institution_id == Institution.id)
        .group_by(Institution.id, Institution.name)
        .having(overdue > 0)
        .order_by(Institution.name)
    )
    if not role.can_see_all_institutions:
        query = query.where(_in_scope(scope))

    result = await db.execute(query)
    return OverdueMaintenanceSummary(
        institutions=[
            InstitutionOverdueMaintenance.model_validate(dict(row))
            for row in result.mappings().all()
        ]
    )
