"""
Garden CRM API - Ownership lookups
Comprobaciones de pertenencia compartidas por los servicios
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from garden_crm.exceptions import NotFoundError, ValidationError
from garden_crm.models import Client, Zone


def require_client(db: Session, owner_id: UUID, client_id: UUID, field: str = "client_id") -> Client:
    """Cliente referenciado desde otro recurso; si no existe es error de campo"""
    client = db.query(Client).filter(
        Client.id == client_id,
        Client.owner_id == owner_id
    ).first()

    if not client:
        raise ValidationError.single(field, "Client not found")
    return client


def require_zone(
    db: Session,
    owner_id: UUID,
    zone_id: UUID,
    client_id: Optional[UUID] = None,
    field: str = "zone_id",
) -> Zone:
    """Zona referenciada; si se indica client_id debe pertenecer a ese cliente"""
    zone = db.query(Zone).filter(
        Zone.id == zone_id,
        Zone.owner_id == owner_id
    ).first()

    if not zone:
        raise ValidationError.single(field, "Zone not found")
    if client_id is not None and zone.client_id != client_id:
        raise ValidationError.single(field, "Zone does not belong to the selected client")
    return zone


def get_owned_zone(db: Session, owner_id: UUID, zone_id: UUID) -> Zone:
    """Zona pedida por id en la ruta: si no existe es un 404"""
    zone = db.query(Zone).filter(
        Zone.id == zone_id,
        Zone.owner_id == owner_id
    ).first()

    if not zone:
        raise NotFoundError("Zone")
    return zone
