"""
Garden CRM API - Auth Service
JWT (access/refresh) y hashing de passwords de las cuentas
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from garden_crm.config import settings

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(claims: dict, token_type: str, lifetime: timedelta) -> str:
    payload = dict(claims)
    payload["exp"] = datetime.now(timezone.utc) + lifetime
    payload["type"] = token_type
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(claims: dict, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(claims, ACCESS, lifetime)


def create_refresh_token(claims: dict) -> str:
    return _encode(claims, REFRESH, timedelta(days=settings.refresh_token_expire_days))


def create_tokens(owner_id: str, email: str) -> Tuple[str, str]:
    """Par (access, refresh) para una cuenta"""
    claims = {"sub": str(owner_id), "email": email}
    return create_access_token(claims), create_refresh_token(claims)


def decode_token(token: str, token_type: Optional[str] = None) -> Optional[dict]:
    """
    Payload del token, o None si la firma/expiración no son válidas
    o si no es del tipo pedido.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    if token_type is not None and payload.get("type") != token_type:
        return None
    return payload


def verify_access_token(token: str) -> Optional[dict]:
    return decode_token(token, ACCESS)


def verify_refresh_token(token: str) -> Optional[dict]:
    return decode_token(token, REFRESH)


def owner_id_from(payload: Optional[dict]) -> Optional[UUID]:
    """UUID del claim sub, o None si falta o no es un UUID"""
    if not payload or not payload.get("sub"):
        return None
    try:
        return UUID(payload["sub"])
    except ValueError:
        return None
