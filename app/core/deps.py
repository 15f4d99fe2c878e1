# app/core/deps.py
from dataclasses import dataclass
from typing import Annotated

from fastapi import Header, Path
from jose import JWTError

from app.core.errors import Unauthorized
from app.core.security import decode_access_token

# ids son INTEGER de 32 bits en la DB; fuera de rango → 400 antes de tocar el driver
MAX_ID = 2**31 - 1

EntityId = Annotated[int, Path(ge=1, le=MAX_ID)]


@dataclass(frozen=True)
class CurrentUser:
    """Claims del bearer token, ya validados."""
    id: int
    email: str
    username: str


def _extract_token(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthorized("No token provided")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise Unauthorized("No token provided")
    return token


async def get_current_user(
    authorization: str | None = Header(None),
) -> CurrentUser:
    """
    Guardia de autenticación: exige `Authorization: Bearer <token>`.
    Se inyecta con Depends en cada endpoint protegido.
    """
    token = _extract_token(authorization)
    try:
        claims = decode_access_token(token)
        return CurrentUser(
            id=int(claims["id"]),
            email=str(claims["email"]),
            username=str(claims["username"]),
        )
    except (JWTError, TypeError, ValueError):
        raise Unauthorized("Invalid token")
