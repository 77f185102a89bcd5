"""
Garden CRM API - Visits
Visitas programadas a un cliente, con la lista de zonas a revisar
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import NotFoundError, ValidationError
from garden_crm.models import Visit, Zone
from garden_crm.schemas import VisitCreate, VisitResponse, VisitUpdate
from garden_crm.services.cache import ListCache
from garden_crm.services.lookups import require_client


def _get_visit(db: Session, owner_id: UUID, visit_id: UUID) -> Visit:
    visit = db.query(Visit).filter(
        Visit.id == visit_id,
        Visit.owner_id == owner_id
    ).first()

    if not visit:
        raise NotFoundError("Visit")
    return visit


def _check_zones(db: Session, owner_id: UUID, client_id: UUID, zone_ids: Sequence[UUID]) -> List[str]:
    """Todas las zonas deben ser del cliente de la visita"""
    if not zone_ids:
        return []
    found = {
        row[0] for row in db.query(Zone.id).filter(
            Zone.id.in_(list(zone_ids)),
            Zone.owner_id == owner_id,
            Zone.client_id == client_id,
        ).all()
    }
    missing = [zid for zid in zone_ids if zid not in found]
    if missing:
        raise ValidationError.single("zones", "Zones not found for this client: " + ", ".join(str(z) for z in missing))
    return [str(zid) for zid in dict.fromkeys(zone_ids)]


def _invalidate(cache: Optional[ListCache], owner_id: UUID) -> None:
    if cache is not None:
        cache.invalidate(owner_id, "visits", "clients")


def list_visits(
    db: Session,
    owner_id: UUID,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    cache: Optional[ListCache] = None,
) -> List[VisitResponse]:
    """Visitas del owner en [start, end), ordenadas por fecha"""
    def load():
        query = (
            db.query(Visit)
            .options(selectinload(Visit.client))
            .filter(Visit.owner_id == owner_id)
        )
        if start is not None:
            query = query.filter(Visit.scheduled_date >= start)
        if end is not None:
            query = query.filter(Visit.scheduled_date < end)
        return [VisitResponse.model_validate(v) for v in query.order_by(Visit.scheduled_date.asc()).all()]

    if cache is None or start is not None or end is not None:
        return load()
    return cache.get(ListCache.key(owner_id, "visits"), load)


def get_visit(db: Session, owner_id: UUID, visit_id: UUID) -> Visit:
    return _get_visit(db, owner_id, visit_id)


def visits_for_day(db: Session, owner_id: UUID, day: Optional[date] = None) -> List[VisitResponse]:
    day = day or datetime.now(timezone.utc).date()
    start = datetime.combine(day, time.min)
    return list_visits(db, owner_id, start=start, end=start + timedelta(days=1))


def create_visit(db: Session, owner_id: UUID, data: VisitCreate, cache: Optional[ListCache] = None) -> Visit:
    require_client(db, owner_id, data.client_id)
    zones = _check_zones(db, owner_id, data.client_id, data.zones)

    visit = Visit(owner_id=owner_id, **data.model_dump(exclude={"zones"}))
    visit.zones = zones
    if visit.status == "completed":
        visit.completed_at = datetime.now(timezone.utc)

    with unit_of_work(db):
        db.add(visit)
    db.refresh(visit)

    _invalidate(cache, owner_id)
    return visit


def update_visit(db: Session, owner_id: UUID, visit_id: UUID, data: VisitUpdate, cache: Optional[ListCache] = None) -> Visit:
    visit = _get_visit(db, owner_id, visit_id)
    update_data = data.model_dump(exclude_unset=True)

    for field in ("scheduled_date", "priority", "status", "zones"):
        if field in update_data and update_data[field] is None:
            update_data.pop(field)

    if "zones" in update_data:
        update_data["zones"] = _check_zones(db, owner_id, visit.client_id, update_data["zones"])

    new_status = update_data.get("status")
    if new_status == "completed" and visit.status != "completed":
        update_data["completed_at"] = datetime.now(timezone.utc)
    elif new_status and new_status != "completed":
        update_data["completed_at"] = None

    with unit_of_work(db):
        for field, value in update_data.items():
            setattr(visit, field, value)
    db.refresh(visit)

    _invalidate(cache, owner_id)
    return visit


def complete_visit(db: Session, owner_id: UUID, visit_id: UUID, cache: Optional[ListCache] = None) -> Visit:
    return update_visit(db, owner_id, visit_id, VisitUpdate(status="completed"), cache=cache)


def delete_visit(db: Session, owner_id: UUID, visit_id: UUID, cache: Optional[ListCache] = None) -> None:
    visit = _get_visit(db, owner_id, visit_id)

    with unit_of_work(db):
        db.delete(visit)

    _invalidate(cache, owner_id)
