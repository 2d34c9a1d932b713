"""Dashboard reports for an authenticated identity.

Every report resolves the caller's institution scope, aggregates over it and
either returns the complete report or raises a ``DashboardError``.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import DashboardError, InventoryAPIException
from src.schemas.dashboard import (
    DashboardSummary,
    InventoryProgressByInstitution,
    InventoryProgressByService,
    ModelDistribution,
    ModelDistributionByInstitution,
    OverdueMaintenanceSummary,
    StateByModel,
    StateByService,
    TopInventoryTakers,
)
from src.services import aggregations
from src.utils.constants import UserRole

ReportT = TypeVar("ReportT")


async def _build_report(
    message: str,
    aggregation: Callable[[AsyncSession, int, str | UserRole], Awaitable[ReportT]],
    db: AsyncSession,
    user_id: int,
    role: str | UserRole,
) -> ReportT:
    try:
        return await aggregation(db, user_id, role)
    except InventoryAPIException:
        raise
    except Exception as exc:
        raise DashboardError(message, details=str(exc)) from exc


async def get_summary(db: AsyncSession, user_id: int, role: str | UserRole) -> DashboardSummary:
    return await _build_report(
        "Error al obtener resumen del dashboard", aggregations.get_summary, db, user_id, role
    )


async def get_model_distribution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> ModelDistribution:
    return await _build_report(
        "Error al obtener distribución por modelos",
        aggregations.get_model_distribution,
        db,
        user_id,
        role,
    )


async def get_model_distribution_by_institution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> ModelDistributionByInstitution:
    return await _build_report(
        "Error al obtener distribución de modelos por institución",
        aggregations.get_model_distribution_by_institution,
        db,
        user_id,
        role,
    )


async def get_inventory_progress_by_institution(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> InventoryProgressByInstitution:
    return await _build_report(
        "Error al obtener progreso por institución",
        aggregations.get_inventory_progress_by_institution,
        db,
        user_id,
        role,
    )


async def get_inventory_progress_by_service(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> InventoryProgressByService:
    return await _build_report(
        "Error al obtener progreso por servicio",
        aggregations.get_inventory_progress_by_service,
        db,
        user_id,
        role,
    )


async def get_state_by_service(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> StateByService:
    return await _build_report(
        "Error al obtener estado por servicio",
        aggregations.get_state_by_service,
        db,
        user_id,
        role,
    )


async def get_state_by_model(db: AsyncSession, user_id: int, role: str | UserRole) -> StateByModel:
    return await _build_report(
        "Error al obtener estado por modelo",
        aggregations.get_state_by_model,
        db,
        user_id,
        role,
    )


async def get_top_inventory_takers(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> TopInventoryTakers:
    return await _build_report(
        "Error al obtener inventariadores top",
        aggregations.get_top_inventory_takers,
        db,
        user_id,
        role,
    )


async def get_overdue_maintenance_summary(
    db: AsyncSession, user_id: int, role: str | UserRole
) -> OverdueMaintenanceSummary:
    return await _build_report(
        "Error al obtener el resumen de mantenimientos vencidos",
        aggregations.get_overdue_maintenance_summary,
        db,
        user_id,
        role,
    )
