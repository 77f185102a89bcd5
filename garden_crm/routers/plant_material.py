"""
Garden CRM API - Plant Material Router
Catálogo de plantas (solo lectura)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner
from garden_crm.models import Owner
from garden_crm.schemas import PlantMaterialResponse, PlantMaterialSummary
from garden_crm.services.plant_material import get_plant_material, list_plant_material

router = APIRouter(prefix="/plant-material", tags=["Plant Material"])


@router.get("", response_model=List[PlantMaterialSummary])
def list_catalog(
    search: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Catálogo ordenado por popularidad y nombre común
    """
    return list_plant_material(db, search=search, limit=limit)


@router.get("/{plant_id}", response_model=PlantMaterialResponse)
def get_catalog_entry(
    plant_id: int,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return get_plant_material(db, plant_id)
