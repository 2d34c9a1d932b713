from typing import Any

from src.schemas.common import BaseSchema


class AdminSummaryData(BaseSchema):
    total_inventory_takers: int = 0
    total_institutions: int = 0


class DashboardSummary(BaseSchema):
    total_pumps: int = 0
    inventoried_pumps_this_year: int = 0
    operative_pumps: int = 0
    overdue_pumps_maintenance: int = 0
    admin_data: AdminSummaryData | None = None


class ModelCount(BaseSchema):
    model_name: str
    count: int


class ModelDistribution(BaseSchema):
    models: list[ModelCount] = []


class ModelDistributionByInstitution(BaseSchema):
    total_pumps: int = 0
    models: list[str] = []
    # One row per institution: institutionName, total and a count per model name
    data: list[dict[str, Any]] = []


class InstitutionProgress(BaseSchema):
    institution_name: str
    pumps_inventoried_this_year: int
    total_pumps: int


class InventoryProgressByInstitution(BaseSchema):
    institutions: list[InstitutionProgress] = []


class ServiceProgress(BaseSchema):
    service_id: int
    service_name: str
    pumps_inventoried_this_year: int
    total_pumps: int


class InstitutionServiceProgress(BaseSchema):
    institution_id: int
    institution_name: str
    services: list[ServiceProgress] = []


class InventoryProgressByService(BaseSchema):
    institutions: list[InstitutionServiceProgress] = []


class ServiceState(BaseSchema):
    service_id: int
    service_name: str
    inoperative_pumps_count: int
    total_pumps: int


class InstitutionServiceState(BaseSchema):
    institution_id: int
    institution_name: str
    services: list[ServiceState] = []


class StateByService(BaseSchema):
    institutions: list[InstitutionServiceState] = []


class ModelState(BaseSchema):
    model_name: str
    inoperative_pumps: int
    total_pumps: int


class StateByModel(BaseSchema):
    models: list[ModelState] = []


class InventoryTaker(BaseSchema):
    user_id: int
    inventory_taker_name: str
    pumps_inventoried_this_year: int


class TopInventoryTakers(BaseSchema):
    top_inventory_takers: list[InventoryTaker] = []
    year: int


class InstitutionOverdueMaintenance(BaseSchema):
    institution_name: str
    overdue_maintenance_count: int


class OverdueMaintenanceSummary(BaseSchema):
    institutions: list[InstitutionOverdueMaintenance] = []
