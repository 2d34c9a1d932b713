from fastapi import APIRouter

from src.core.dependencies import DB, CurrentIdentity
from src.schemas.common import ErrorResponse, SuccessResponse
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
from src.services import dashboard as dashboard_service

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get(
    "/summary",
    response_model=SuccessResponse[DashboardSummary],
    response_model_exclude_none=True,
)
async def get_summary(db: DB, identity: CurrentIdentity):
    summary = await dashboard_service.get_summary(db, identity.id, identity.role)
    return SuccessResponse[DashboardSummary](data=summary)


@router.get("/model-distribution", response_model=SuccessResponse[ModelDistribution])
async def get_model_distribution(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_model_distribution(db, identity.id, identity.role)
    return SuccessResponse[ModelDistribution](data=report)


@router.get(
    "/model-distribution/by-institution",
    response_model=SuccessResponse[ModelDistributionByInstitution],
)
async def get_model_distribution_by_institution(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_model_distribution_by_institution(
        db, identity.id, identity.role
    )
    return SuccessResponse[ModelDistributionByInstitution](data=report)


@router.get(
    "/inventory-progress/by-institution",
    response_model=SuccessResponse[InventoryProgressByInstitution],
)
async def get_inventory_progress_by_institution(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_inventory_progress_by_institution(
        db, identity.id, identity.role
    )
    return SuccessResponse[InventoryProgressByInstitution](data=report)


@router.get(
    "/inventory-progress/by-service",
    response_model=SuccessResponse[InventoryProgressByService],
)
async def get_inventory_progress_by_service(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_inventory_progress_by_service(
        db, identity.id, identity.role
    )
    return SuccessResponse[InventoryProgressByService](data=report)


@router.get("/state/by-service", response_model=SuccessResponse[StateByService])
async def get_state_by_service(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_state_by_service(db, identity.id, identity.role)
    return SuccessResponse[StateByService](data=report)


@router.get("/state/by-model", response_model=SuccessResponse[StateByModel])
async def get_state_by_model(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_state_by_model(db, identity.id, identity.role)
    return SuccessResponse[StateByModel](data=report)


@router.get("/top-inventory-takers", response_model=SuccessResponse[TopInventoryTakers])
async def get_top_inventory_takers(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_top_inventory_takers(db, identity.id, identity.role)
    return SuccessResponse[TopInventoryTakers](data=report)


@router.get(
    "/overdue-maintenance/by-institution",
    response_model=SuccessResponse[OverdueMaintenanceSummary],
)
async def get_overdue_maintenance_summary(db: DB, identity: CurrentIdentity):
    report = await dashboard_service.get_overdue_maintenance_summary(
        db, identity.id, identity.role
    )
    return SuccessResponse[OverdueMaintenanceSummary](data=report)
