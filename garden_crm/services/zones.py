"""
Garden CRM API - Zones
CRUD de zonas del jardín; la gestión de plantas vive en zone_plants
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import ValidationError
from garden_crm.models import Zone, ZonePlantMaterial
from garden_crm.schemas import SOIL_OTHER_MESSAGE, ZoneCreate, ZoneCreateResult, ZoneResponse, ZoneUpdate
from garden_crm.services.cache import ListCache
from garden_crm.services.lookups import get_owned_zone
from garden_crm.services.zone_plants import ZONE_LISTS, ZonePlantAssociator

logger = logging.getLogger(__name__)


class ZoneService:
    def __init__(self, db: Session, cache: Optional[ListCache] = None):
        self.db = db
        self.cache = cache
        self.plants = ZonePlantAssociator(db, cache)

    def _query(self, owner_id: UUID):
        return (
            self.db.query(Zone)
            .options(
                selectinload(Zone.client),
                selectinload(Zone.plant_links).selectinload(ZonePlantMaterial.plant_material),
            )
            .filter(Zone.owner_id == owner_id)
        )

    def list_zones(self, owner_id: UUID, client_id: Optional[UUID] = None) -> List[ZoneResponse]:
        def load():
            query = self._query(owner_id)
            if client_id is not None:
                query = query.filter(Zone.client_id == client_id)
            zones = query.order_by(Zone.created_at.desc()).all()
            return [ZoneResponse.model_validate(z) for z in zones]

        if self.cache is None or client_id is not None:
            return load()
        return self.cache.get(ListCache.key(owner_id, "zones"), load)

    def get_zone(self, owner_id: UUID, zone_id: UUID) -> Zone:
        get_owned_zone(self.db, owner_id, zone_id)
        return self._query(owner_id).filter(Zone.id == zone_id).one()

    def create_zone(self, owner_id: UUID, data: ZoneCreate) -> ZoneCreateResult:
        return self.plants.create_zone_with_plants(data, data.plant_names, owner_id)

    def update_zone(self, owner_id: UUID, zone_id: UUID, data: ZoneUpdate) -> Zone:
        """
        Patch parcial. La regla "Other requiere descripción" se comprueba
        sobre el registro ya combinado.
        """
        zone = get_owned_zone(self.db, owner_id, zone_id)
        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in ("soil_type_other", "sun_hours_estimate", "sun_notes", "notes", "watering_schedule")
        }

        soil_enum = update_data.get("soil_type_enum", zone.soil_type_enum)
        soil_other = update_data.get("soil_type_other", zone.soil_type_other)
        if soil_enum == "Other" and not (soil_other or "").strip():
            raise ValidationError.single("soil_type_other", SOIL_OTHER_MESSAGE)
        if "soil_type_enum" in update_data and soil_enum != "Other":
            update_data["soil_type_other"] = None

        with unit_of_work(self.db):
            for field, value in update_data.items():
                setattr(zone, field, value)

        self._invalidate(owner_id, "tasks")
        return self.get_zone(owner_id, zone_id)

    def mark_watered(self, owner_id: UUID, zone_id: UUID, when: Optional[datetime] = None) -> Zone:
        zone = get_owned_zone(self.db, owner_id, zone_id)

        with unit_of_work(self.db):
            zone.last_watered_at = when or datetime.now(timezone.utc)

        self._invalidate(owner_id)
        return self.get_zone(owner_id, zone_id)

    def delete_zone(self, owner_id: UUID, zone_id: UUID) -> None:
        zone = get_owned_zone(self.db, owner_id, zone_id)

        with unit_of_work(self.db):
            self.db.delete(zone)

        self._invalidate(owner_id, "tasks")
        logger.info("Zone %s deleted for owner %s", zone_id, owner_id)

    def _invalidate(self, owner_id: UUID, *extra: str) -> None:
        if self.cache is not None:
            self.cache.invalidate(owner_id, *ZONE_LISTS, *extra)
