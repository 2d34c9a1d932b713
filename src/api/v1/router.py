from fastapi import APIRouter

from src.api.v1 import dashboard

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(dashboard.router)
