"""
Garden CRM API - Photos Router
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner
from garden_crm.models import Owner
from garden_crm.schemas import MessageResponse, PhotoCreate, PhotoResponse, PhotoUpdate
from garden_crm.services import photos as photo_service

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.get("", response_model=List[PhotoResponse])
def list_photos(
    client_id: Optional[UUID] = Query(None),
    zone_id: Optional[UUID] = Query(None),
    tag: Optional[str] = Query(None),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return photo_service.list_photos(db, current_owner.id, client_id=client_id, zone_id=zone_id, tag=tag)


@router.post("", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
def create_photo(
    photo: PhotoCreate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Registra una foto ya subida al storage (file_path)
    """
    return photo_service.create_photo(db, current_owner.id, photo)


@router.patch("/{photo_id}", response_model=PhotoResponse)
def update_photo(
    photo_id: UUID,
    photo_update: PhotoUpdate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return photo_service.update_photo(db, current_owner.id, photo_id, photo_update)


@router.delete("/{photo_id}", response_model=MessageResponse)
def delete_photo(
    photo_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    photo_service.delete_photo(db, current_owner.id, photo_id)
    return {"message": "Photo deleted"}
