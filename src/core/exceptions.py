from typing import Any

from fastapi import HTTPException, status


class InventoryAPIException(HTTPException):
    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        message: str = "Error interno del servidor",
        details: Any = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.details = details


class AuthenticationError(InventoryAPIException):
    def __init__(self, message: str = "Token inválido", details: Any = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED, message=message, details=details
        )


class InternalServerError(InventoryAPIException):
    def __init__(self, message: str = "Error interno del servidor", details: Any = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=message, details=details
        )


class DashboardError(InventoryAPIException):
    """A dashboard report could not be produced."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=message, details=details
        )
