"""
Garden CRM API - Dashboard summary
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from garden_crm.models import Client, Task, Visit, Zone
from garden_crm.schemas import DashboardSummary


def get_summary(db: Session, owner_id: UUID, today: Optional[date] = None) -> DashboardSummary:
    """Contadores del owner para la pantalla principal"""
    today = today or datetime.now(timezone.utc).date()
    day_start = datetime.combine(today, time.min)

    total_clients = db.query(func.count(Client.id)).filter(
        Client.owner_id == owner_id
    ).scalar() or 0

    active_clients = db.query(func.count(Client.id)).filter(
        Client.owner_id == owner_id,
        Client.status == "active"
    ).scalar() or 0

    total_zones = db.query(func.count(Zone.id)).filter(
        Zone.owner_id == owner_id
    ).scalar() or 0

    total_plants = db.query(func.sum(Zone.plant_count)).filter(
        Zone.owner_id == owner_id
    ).scalar() or 0

    open_statuses = ("pending", "in_progress")
    pending_tasks = db.query(func.count(Task.id)).filter(
        Task.owner_id == owner_id,
        Task.status.in_(open_statuses)
    ).scalar() or 0

    # Vencidas: abiertas con fecha límite anterior a hoy
    overdue_tasks = db.query(func.count(Task.id)).filter(
        Task.owner_id == owner_id,
        Task.status.in_(open_statuses),
        Task.due_date < day_start
    ).scalar() or 0

    visits_today = db.query(func.count(Visit.id)).filter(
        Visit.owner_id == owner_id,
        Visit.scheduled_date >= day_start,
        Visit.scheduled_date < day_start + timedelta(days=1)
    ).scalar() or 0

    return DashboardSummary(
        total_clients=total_clients,
        active_clients=active_clients,
        total_zones=total_zones,
        total_plants=int(total_plants),
        pending_tasks=pending_tasks,
        overdue_tasks=overdue_tasks,
        visits_today=visits_today,
    )
