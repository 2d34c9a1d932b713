from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import AuthenticationError
from src.core.security import decode_token
from src.database import async_session_maker
from src.utils.constants import UserRole

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    id: int
    role: UserRole


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    if credentials is None:
        raise AuthenticationError("Token requerido")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError()

    if payload.get("type") != "access":
        raise AuthenticationError("Tipo de token inválido")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError()

    try:
        identity_id = int(user_id)
    except (TypeError, ValueError):
        raise AuthenticationError() from None

    return Identity(id=identity_id, role=UserRole.parse(payload.get("role")))


# Type aliases for cleaner dependency injection
DB = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
