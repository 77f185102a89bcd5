"""
Garden CRM API - Plant Material catalog (solo lectura)
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from garden_crm.exceptions import NotFoundError
from garden_crm.models import PlantMaterial


def list_plant_material(db: Session, search: Optional[str] = None, limit: Optional[int] = None) -> List[PlantMaterial]:
    """
    Catálogo ordenado por popularidad (sin ranking al final) y nombre común.
    search filtra por nombre común o científico sin distinguir mayúsculas.
    """
    query = db.query(PlantMaterial)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(
            PlantMaterial.common_name.ilike(pattern),
            PlantMaterial.scientific_name.ilike(pattern),
        ))

    query = query.order_by(
        PlantMaterial.popularity_rank.is_(None),
        PlantMaterial.popularity_rank.asc(),
        PlantMaterial.common_name.asc(),
    )

    if limit:
        query = query.limit(limit)
    return query.all()


def get_plant_material(db: Session, plant_id: int) -> PlantMaterial:
    plant = db.query(PlantMaterial).filter(PlantMaterial.id == plant_id).first()
    if not plant:
        raise NotFoundError("Plant material")
    return plant
