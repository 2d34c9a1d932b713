from src.services import aggregations, dashboard, scope, shaping

__all__ = [
    "scope",
    "shaping",
    "aggregations",
    "dashboard",
]
