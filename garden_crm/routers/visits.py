"""
Garden CRM API - Visits Router
Calendario de visitas
"""

from datetime import date, datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner, get_list_cache
from garden_crm.models import Owner
from garden_crm.schemas import MessageResponse, VisitCreate, VisitResponse, VisitUpdate
from garden_crm.services import visits as visit_service
from garden_crm.services.cache import ListCache

router = APIRouter(prefix="/visits", tags=["Visits"])


@router.get("", response_model=List[VisitResponse])
def list_visits(
    start: Optional[datetime] = Query(None, description="Desde (incluido)"),
    end: Optional[datetime] = Query(None, description="Hasta (excluido)"),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return visit_service.list_visits(db, current_owner.id, start=start, end=end, cache=cache)


@router.get("/today", response_model=List[VisitResponse])
def visits_today(
    day: Optional[date] = Query(None),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Visitas del día (hoy por defecto)
    """
    return visit_service.visits_for_day(db, current_owner.id, day)


@router.post("", response_model=VisitResponse, status_code=status.HTTP_201_CREATED)
def create_visit(
    visit: VisitCreate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return visit_service.create_visit(db, current_owner.id, visit, cache=cache)


@router.get("/{visit_id}", response_model=VisitResponse)
def get_visit(
    visit_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return visit_service.get_visit(db, current_owner.id, visit_id)


@router.patch("/{visit_id}", response_model=VisitResponse)
def update_visit(
    visit_id: UUID,
    visit_update: VisitUpdate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return visit_service.update_visit(db, current_owner.id, visit_id, visit_update, cache=cache)


@router.post("/{visit_id}/complete", response_model=VisitResponse)
def complete_visit(
    visit_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return visit_service.complete_visit(db, current_owner.id, visit_id, cache=cache)


@router.delete("/{visit_id}", response_model=MessageResponse)
def delete_visit(
    visit_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    visit_service.delete_visit(db, current_owner.id, visit_id, cache=cache)
    return {"message": "Visit deleted"}
