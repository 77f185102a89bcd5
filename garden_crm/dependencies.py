"""
Garden CRM API - Dependencies
Dependencias comunes para inyección.

La sesión del usuario no es estado global: get_current_owner resuelve el
token en cada petición y el owner se pasa explícitamente a los servicios.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from garden_crm.config import settings
from garden_crm.database import get_db
from garden_crm.services.auth import owner_id_from, verify_access_token
from garden_crm.services.cache import ListCache
from garden_crm.models.owner import Owner

# Bearer token security
security = HTTPBearer()


@lru_cache()
def get_list_cache() -> ListCache:
    """Cache de listados compartida por el proceso"""
    return ListCache(
        enabled=settings.list_cache_enabled,
        ttl_seconds=settings.list_cache_ttl_seconds,
        maxsize=settings.list_cache_maxsize,
    )


def get_current_owner(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Owner:
    """
    Dependency que obtiene la cuenta actual desde el JWT token.
    Uso: current_owner: Owner = Depends(get_current_owner)
    """
    owner_id = owner_id_from(verify_access_token(credentials.credentials))
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    owner = db.query(Owner).filter(Owner.id == owner_id).first()
    if not owner:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
        )

    return owner
