"""
Garden CRM API - Zone <-> Plant Material association

Mantiene la tabla puente zone_plantmaterial con semántica de reemplazo:
en cada edición se borran todas las filas de la zona y se insertan las
seleccionadas, y se recalcula plant_count. Los tres pasos van en una única
transacción; si falla cualquiera de ellos la zona conserva sus plantas
anteriores.

No hay bloqueo entre sesiones: dos ediciones concurrentes de la misma zona
se resuelven por "el último gana".
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import ValidationError
from garden_crm.models import PlantMaterial, Zone, ZonePlantMaterial
from garden_crm.schemas import ZoneCreateResult, ZoneForm, ZoneResponse, ZonePlantsResult
from garden_crm.services.cache import ListCache
from garden_crm.services.lookups import get_owned_zone, require_client

logger = logging.getLogger(__name__)

# Listados que muestran zonas o su nº de plantas
ZONE_LISTS = ("zones", "clients")


def _unique(ids: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for plant_id in ids:
        if plant_id not in seen:
            seen.add(plant_id)
            result.append(plant_id)
    return result


def zone_from_form(form: ZoneForm, owner_id: UUID) -> Zone:
    data = form.model_dump(exclude={"plant_names"})
    if data["soil_type_enum"] != "Other":
        data["soil_type_other"] = None
    return Zone(owner_id=owner_id, plant_count=0, **data)


class ZonePlantAssociator:
    def __init__(self, db: Session, cache: Optional[ListCache] = None):
        self.db = db
        self.cache = cache

    # ------------------------------------------------------------------
    # Catálogo
    # ------------------------------------------------------------------

    def resolve_plant_names(self, names: Sequence[str]) -> Tuple[List[int], List[str]]:
        """
        Traduce nombres seleccionados a ids del catálogo.
        Coincidencia exacta (sensible a mayúsculas) con common_name o
        scientific_name. Devuelve (ids resueltos, nombres sin resolver).
        """
        wanted = [n for n in names if n]
        if not wanted:
            return [], []

        rows = (
            self.db.query(PlantMaterial)
            .filter(or_(
                PlantMaterial.common_name.in_(wanted),
                PlantMaterial.scientific_name.in_(wanted),
            ))
            .all()
        )
        # Ante nombres repetidos en el catálogo gana el más popular
        rows.sort(key=lambda p: (p.popularity_rank is None, p.popularity_rank or 0, p.id))

        by_name = {}
        for plant in rows:
            for name in (plant.common_name, plant.scientific_name):
                if name and name not in by_name:
                    by_name[name] = plant.id

        resolved, unresolved = [], []
        for name in wanted:
            if name in by_name:
                resolved.append(by_name[name])
            else:
                unresolved.append(name)
        return _unique(resolved), unresolved

    def _check_plant_ids(self, plant_ids: List[int]) -> None:
        if not plant_ids:
            return
        found = {
            row[0] for row in
            self.db.query(PlantMaterial.id).filter(PlantMaterial.id.in_(plant_ids)).all()
        }
        missing = [pid for pid in plant_ids if pid not in found]
        if missing:
            raise ValidationError.single(
                "plant_ids",
                "Unknown plant material ids: " + ", ".join(str(pid) for pid in missing),
            )

    # ------------------------------------------------------------------
    # Reemplazo de asociaciones
    # ------------------------------------------------------------------

    def _replace_links(self, zone: Zone, plant_ids: List[int], owner_id: UUID) -> None:
        """Borra todo, inserta la selección y sincroniza plant_count. No hace commit."""
        self.db.query(ZonePlantMaterial).filter(
            ZonePlantMaterial.zone_id == zone.id
        ).delete(synchronize_session=False)

        if plant_ids:
            self.db.add_all([
                ZonePlantMaterial(zone_id=zone.id, plantmaterial_id=pid, owner_id=owner_id)
                for pid in plant_ids
            ])

        zone.plant_count = len(plant_ids)
        self.db.flush()
        self.db.expire(zone, ["plant_links"])

    def set_zone_plants(self, zone_id: UUID, selected_plant_ids: Sequence[int], owner_id: UUID) -> ZonePlantsResult:
        zone = get_owned_zone(self.db, owner_id, zone_id)
        plant_ids = _unique(selected_plant_ids)
        self._check_plant_ids(plant_ids)

        with unit_of_work(self.db):
            self._replace_links(zone, plant_ids, owner_id)

        self._invalidate(owner_id)
        logger.info("Zone %s plants replaced (%d linked)", zone_id, len(plant_ids))

        return ZonePlantsResult(zone_id=zone.id, plant_ids=plant_ids, plant_count=len(plant_ids))

    def create_zone_with_plants(
        self,
        zone_data: ZoneForm,
        selected_plant_names: Sequence[str],
        owner_id: UUID,
    ) -> ZoneCreateResult:
        """
        Crea la zona y enlaza las plantas cuyo nombre exista en el catálogo.
        Los nombres que no se resuelven no bloquean la creación: se omiten
        y se devuelven en unresolved_plant_names.
        """
        require_client(self.db, owner_id, zone_data.client_id)
        plant_ids, unresolved = self.resolve_plant_names(selected_plant_names)

        if unresolved:
            logger.warning(
                "Skipping unresolved plant names for new zone %r: %s",
                zone_data.name, ", ".join(unresolved),
            )

        zone = zone_from_form(zone_data, owner_id)
        with unit_of_work(self.db):
            self.db.add(zone)
            self.db.flush()
            self._replace_links(zone, plant_ids, owner_id)

        self._invalidate(owner_id)
        logger.info("Zone %s created with %d plants", zone.id, len(plant_ids))

        zone = self._load_zone(zone.id)
        return ZoneCreateResult(
            zone=ZoneResponse.model_validate(zone),
            linked_plant_ids=plant_ids,
            unresolved_plant_names=unresolved,
        )

    def list_zone_plants(self, zone_id: UUID, owner_id: UUID) -> List[ZonePlantMaterial]:
        get_owned_zone(self.db, owner_id, zone_id)
        return (
            self.db.query(ZonePlantMaterial)
            .options(selectinload(ZonePlantMaterial.plant_material))
            .filter(ZonePlantMaterial.zone_id == zone_id)
            .order_by(ZonePlantMaterial.created_at)
            .all()
        )

    def _load_zone(self, zone_id: UUID) -> Zone:
        return (
            self.db.query(Zone)
            .options(
                selectinload(Zone.client),
                selectinload(Zone.plant_links).selectinload(ZonePlantMaterial.plant_material),
            )
            .filter(Zone.id == zone_id)
            .one()
        )

    def _invalidate(self, owner_id: UUID) -> None:
        if self.cache is not None:
            self.cache.invalidate(owner_id, *ZONE_LISTS)
