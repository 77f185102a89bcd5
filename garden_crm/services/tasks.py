"""
Garden CRM API - Tasks
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import NotFoundError
from garden_crm.models import Task
from garden_crm.schemas import TaskCreate, TaskResponse, TaskUpdate
from garden_crm.services.cache import ListCache
from garden_crm.services.lookups import require_client, require_zone

logger = logging.getLogger(__name__)


def _get_task(db: Session, owner_id: UUID, task_id: UUID) -> Task:
    task = db.query(Task).filter(
        Task.id == task_id,
        Task.owner_id == owner_id
    ).first()

    if not task:
        raise NotFoundError("Task")
    return task


def _invalidate(cache: Optional[ListCache], owner_id: UUID) -> None:
    if cache is not None:
        cache.invalidate(owner_id, "tasks")


def list_tasks(
    db: Session,
    owner_id: UUID,
    status: Optional[str] = None,
    client_id: Optional[UUID] = None,
    cache: Optional[ListCache] = None,
) -> List[TaskResponse]:
    """Tareas del owner ordenadas por fecha límite"""
    def load():
        query = (
            db.query(Task)
            .options(selectinload(Task.client), selectinload(Task.zone))
            .filter(Task.owner_id == owner_id)
        )
        if status:
            query = query.filter(Task.status == status)
        if client_id:
            query = query.filter(Task.client_id == client_id)
        return [TaskResponse.model_validate(t) for t in query.order_by(Task.due_date.asc()).all()]

    if cache is None or status or client_id:
        return load()
    return cache.get(ListCache.key(owner_id, "tasks"), load)


def get_task(db: Session, owner_id: UUID, task_id: UUID) -> Task:
    return _get_task(db, owner_id, task_id)


def create_task(db: Session, owner_id: UUID, data: TaskCreate, cache: Optional[ListCache] = None) -> Task:
    require_client(db, owner_id, data.client_id)
    if data.zone_id is not None:
        require_zone(db, owner_id, data.zone_id, client_id=data.client_id)

    task = Task(owner_id=owner_id, **data.model_dump())
    if task.status == "completed":
        task.completed_at = datetime.now(timezone.utc)

    with unit_of_work(db):
        db.add(task)
    db.refresh(task)

    _invalidate(cache, owner_id)
    return task


def update_task(db: Session, owner_id: UUID, task_id: UUID, data: TaskUpdate, cache: Optional[ListCache] = None) -> Task:
    task = _get_task(db, owner_id, task_id)
    update_data = data.model_dump(exclude_unset=True)

    if update_data.get("zone_id") is not None:
        require_zone(db, owner_id, update_data["zone_id"], client_id=task.client_id)

    # Campos obligatorios: un None explícito se ignora
    for field in ("title", "due_date", "priority", "status", "recurring"):
        if field in update_data and update_data[field] is None:
            update_data.pop(field)

    new_status = update_data.get("status")
    if new_status == "completed" and task.status != "completed":
        update_data["completed_at"] = datetime.now(timezone.utc)
    elif new_status and new_status != "completed":
        update_data["completed_at"] = None

    with unit_of_work(db):
        for field, value in update_data.items():
            setattr(task, field, value)
    db.refresh(task)

    _invalidate(cache, owner_id)
    return task


def complete_task(db: Session, owner_id: UUID, task_id: UUID, cache: Optional[ListCache] = None) -> Task:
    task = _get_task(db, owner_id, task_id)

    with unit_of_work(db):
        task.status = "completed"
        task.completed_at = datetime.now(timezone.utc)
    db.refresh(task)

    _invalidate(cache, owner_id)
    logger.info("Task %s completed", task_id)
    return task


def delete_task(db: Session, owner_id: UUID, task_id: UUID, cache: Optional[ListCache] = None) -> None:
    task = _get_task(db, owner_id, task_id)

    with unit_of_work(db):
        db.delete(task)

    _invalidate(cache, owner_id)
