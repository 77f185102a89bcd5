"""
Garden CRM API - Tasks Router
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner, get_list_cache
from garden_crm.models import Owner
from garden_crm.schemas import MessageResponse, TaskCreate, TaskResponse, TaskStatus, TaskUpdate
from garden_crm.services import tasks as task_service
from garden_crm.services.cache import ListCache

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    client_id: Optional[UUID] = Query(None),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    """
    Tareas ordenadas por fecha límite, filtrables por estado y cliente
    """
    return task_service.list_tasks(
        db, current_owner.id, status=status_filter, client_id=client_id, cache=cache
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return task_service.create_task(db, current_owner.id, task, cache=cache)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return task_service.get_task(db, current_owner.id, task_id)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: UUID,
    task_update: TaskUpdate,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return task_service.update_task(db, current_owner.id, task_id, task_update, cache=cache)


@router.post("/{task_id}/complete", response_model=TaskResponse)
def complete_task(
    task_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    return task_service.complete_task(db, current_owner.id, task_id, cache=cache)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache)
):
    task_service.delete_task(db, current_owner.id, task_id, cache=cache)
    return {"message": "Task deleted"}
