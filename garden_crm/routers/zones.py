"""
Garden CRM API - Zones Router
Zonas del jardín y sus plantas del catálogo
"""

from datetime import datetime
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner, get_list_cache
from garden_crm.models import Owner
from garden_crm.schemas import (
    MessageResponse,
    ZoneCreate, ZoneCreateResult, ZoneResponse, ZoneUpdate,
    ZonePlantsUpdate, ZonePlantsResult, ZonePlantLinkResponse,
)
from garden_crm.services.cache import ListCache
from garden_crm.services.zones import ZoneService

router = APIRouter(prefix="/zones", tags=["Zones"])


def get_zone_service(
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache),
) -> ZoneService:
    return ZoneService(db, cache)


@router.get("", response_model=List[ZoneResponse])
def list_zones(
    client_id: Optional[UUID] = Query(None),
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    return zones.list_zones(current_owner.id, client_id=client_id)


@router.post("", response_model=ZoneCreateResult, status_code=status.HTTP_201_CREATED)
def create_zone(
    zone: ZoneCreate,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    """
    Crea la zona y enlaza las plantas indicadas por nombre.
    Los nombres que no están en el catálogo se devuelven en
    unresolved_plant_names; no impiden la creación.
    """
    return zones.create_zone(current_owner.id, zone)


@router.get("/{zone_id}", response_model=ZoneResponse)
def get_zone(
    zone_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    return zones.get_zone(current_owner.id, zone_id)


@router.patch("/{zone_id}", response_model=ZoneResponse)
def update_zone(
    zone_id: UUID,
    zone_update: ZoneUpdate,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    return zones.update_zone(current_owner.id, zone_id, zone_update)


@router.post("/{zone_id}/watered", response_model=ZoneResponse)
def mark_zone_watered(
    zone_id: UUID,
    watered_at: Optional[datetime] = Body(None, embed=True),
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    """
    Registra el último riego (ahora, si no se indica fecha)
    """
    return zones.mark_watered(current_owner.id, zone_id, watered_at)


@router.delete("/{zone_id}", response_model=MessageResponse)
def delete_zone(
    zone_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    zones.delete_zone(current_owner.id, zone_id)
    return {"message": "Zone deleted"}


# ============================================================================
# PLANTAS DE LA ZONA
# ============================================================================

@router.get("/{zone_id}/plants", response_model=List[ZonePlantLinkResponse])
def list_zone_plants(
    zone_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    return zones.plants.list_zone_plants(zone_id, current_owner.id)


@router.put("/{zone_id}/plants", response_model=ZonePlantsResult)
def set_zone_plants(
    zone_id: UUID,
    selection: ZonePlantsUpdate,
    current_owner: Owner = Depends(get_current_owner),
    zones: ZoneService = Depends(get_zone_service)
):
    """
    Reemplaza la selección completa de plantas de la zona.
    Una lista vacía elimina todas las asociaciones.
    """
    return zones.plants.set_zone_plants(zone_id, selection.plant_ids, current_owner.id)
