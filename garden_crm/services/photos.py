"""
Garden CRM API - Photos
Solo metadatos: la subida del fichero la hace el storage externo
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import NotFoundError, ValidationError
from garden_crm.models import Photo, PlantMaterial
from garden_crm.schemas import PhotoCreate, PhotoUpdate
from garden_crm.services.lookups import require_client, require_zone


def _get_photo(db: Session, owner_id: UUID, photo_id: UUID) -> Photo:
    photo = db.query(Photo).filter(
        Photo.id == photo_id,
        Photo.owner_id == owner_id
    ).first()

    if not photo:
        raise NotFoundError("Photo")
    return photo


def _require_plant(db: Session, plant_id: int) -> None:
    if db.query(PlantMaterial.id).filter(PlantMaterial.id == plant_id).first() is None:
        raise ValidationError.single("plant_id", "Plant material not found")


def _clean_tags(tags: List[str]) -> List[str]:
    return list(dict.fromkeys(t.strip() for t in tags if t and t.strip()))


def list_photos(
    db: Session,
    owner_id: UUID,
    client_id: Optional[UUID] = None,
    zone_id: Optional[UUID] = None,
    tag: Optional[str] = None,
) -> List[Photo]:
    """Fotos más recientes primero; el filtro por tag se aplica en memoria"""
    query = (
        db.query(Photo)
        .options(selectinload(Photo.client), selectinload(Photo.zone))
        .filter(Photo.owner_id == owner_id)
    )
    if client_id:
        query = query.filter(Photo.client_id == client_id)
    if zone_id:
        query = query.filter(Photo.zone_id == zone_id)

    photos = query.order_by(Photo.created_at.desc()).all()
    if tag:
        photos = [p for p in photos if tag in (p.tags or [])]
    return photos


def create_photo(db: Session, owner_id: UUID, data: PhotoCreate) -> Photo:
    require_client(db, owner_id, data.client_id)
    if data.zone_id is not None:
        require_zone(db, owner_id, data.zone_id, client_id=data.client_id)
    if data.plant_id is not None:
        _require_plant(db, data.plant_id)

    values = data.model_dump()
    values["tags"] = _clean_tags(values["tags"])
    if values["taken_at"] is None:
        values.pop("taken_at")

    photo = Photo(owner_id=owner_id, **values)
    with unit_of_work(db):
        db.add(photo)
    db.refresh(photo)

    return photo


def update_photo(db: Session, owner_id: UUID, photo_id: UUID, data: PhotoUpdate) -> Photo:
    photo = _get_photo(db, owner_id, photo_id)
    update_data = data.model_dump(exclude_unset=True)

    if update_data.get("zone_id") is not None:
        require_zone(db, owner_id, update_data["zone_id"], client_id=photo.client_id)
    if update_data.get("plant_id") is not None:
        _require_plant(db, update_data["plant_id"])
    if "tags" in update_data:
        update_data["tags"] = _clean_tags(update_data["tags"] or [])
    for field in ("title", "taken_at"):
        if field in update_data and update_data[field] is None:
            update_data.pop(field)

    with unit_of_work(db):
        for field, value in update_data.items():
            setattr(photo, field, value)
    db.refresh(photo)

    return photo


def delete_photo(db: Session, owner_id: UUID, photo_id: UUID) -> None:
    photo = _get_photo(db, owner_id, photo_id)

    with unit_of_work(db):
        db.delete(photo)

