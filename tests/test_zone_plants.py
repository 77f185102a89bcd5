"""Asociación zona <-> catálogo con semántica de reemplazo"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from garden_crm.exceptions import NotFoundError, StoreError, ValidationError
from garden_crm.models import Zone, ZonePlantMaterial
from garden_crm.schemas import ZoneCreate
from garden_crm.services.zone_plants import ZonePlantAssociator


@pytest.fixture()
def associator(db, cache):
    return ZonePlantAssociator(db, cache)


@pytest.fixture()
def zone(associator, owner, plants, zone_payload):
    result = associator.create_zone_with_plants(ZoneCreate(**zone_payload), [], owner.id)
    return result.zone


def _links(db, zone_id):
    return db.query(ZonePlantMaterial).filter(ZonePlantMaterial.zone_id == zone_id).all()


def _plant_count(db, zone_id):
    db.expire_all()
    return db.query(Zone).filter(Zone.id == zone_id).one().plant_count


def test_set_same_selection_twice_leaves_no_duplicates(associator, db, owner, zone):
    associator.set_zone_plants(zone.id, [1, 2, 3], owner.id)
    result = associator.set_zone_plants(zone.id, [1, 2, 3], owner.id)

    assert result.plant_count == 3
    assert sorted(link.plantmaterial_id for link in _links(db, zone.id)) == [1, 2, 3]
    assert _plant_count(db, zone.id) == 3


def test_empty_selection_clears_links(associator, db, owner, zone):
    associator.set_zone_plants(zone.id, [1, 2], owner.id)
    result = associator.set_zone_plants(zone.id, [], owner.id)

    assert result.plant_ids == []
    assert _links(db, zone.id) == []
    assert _plant_count(db, zone.id) == 0


def test_repeated_ids_are_stored_once(associator, db, owner, zone):
    result = associator.set_zone_plants(zone.id, [2, 2, 1, 2], owner.id)

    assert result.plant_ids == [2, 1]
    assert len(_links(db, zone.id)) == 2
    assert _plant_count(db, zone.id) == 2


def test_links_are_stamped_with_owner(associator, db, owner, zone):
    associator.set_zone_plants(zone.id, [4], owner.id)

    (link,) = _links(db, zone.id)
    assert link.owner_id == owner.id
    assert link.zone_id == zone.id


def test_unknown_plant_id_is_rejected_before_touching_links(associator, db, owner, zone):
    associator.set_zone_plants(zone.id, [1], owner.id)

    with pytest.raises(ValidationError) as exc_info:
        associator.set_zone_plants(zone.id, [1, 999], owner.id)

    assert "plant_ids" in exc_info.value.field_errors
    assert [link.plantmaterial_id for link in _links(db, zone.id)] == [1]


def test_failed_write_keeps_previous_plants(associator, db, owner, zone, monkeypatch):
    associator.set_zone_plants(zone.id, [1, 2], owner.id)

    original_flush = db.flush

    def failing_flush(*args, **kwargs):
        if db.new:
            raise OperationalError("INSERT INTO zone_plantmaterial", {}, Exception("disk I/O error"))
        return original_flush(*args, **kwargs)

    monkeypatch.setattr(db, "flush", failing_flush)

    with pytest.raises(StoreError) as exc_info:
        associator.set_zone_plants(zone.id, [3], owner.id)
    assert "disk I/O error" in exc_info.value.message

    monkeypatch.setattr(db, "flush", original_flush)
    assert sorted(link.plantmaterial_id for link in _links(db, zone.id)) == [1, 2]
    assert _plant_count(db, zone.id) == 2


def test_zone_of_another_owner_is_not_found(associator, other_owner, zone):
    with pytest.raises(NotFoundError):
        associator.set_zone_plants(zone.id, [1], other_owner.id)


def test_missing_zone_is_not_found(associator, owner, plants):
    with pytest.raises(NotFoundError):
        associator.set_zone_plants(uuid.uuid4(), [1], owner.id)


# ----------------------------------------------------------------------------
# Creación con nombres
# ----------------------------------------------------------------------------

def test_unresolved_name_is_skipped_and_reported(associator, db, owner, plants, zone_payload):
    result = associator.create_zone_with_plants(
        ZoneCreate(**zone_payload), ["Nonexistent Plant", "Basil"], owner.id
    )

    assert result.linked_plant_ids == [1]
    assert result.unresolved_plant_names == ["Nonexistent Plant"]
    assert result.zone.plant_count == 1
    assert [p.common_name for p in result.zone.plants] == ["Basil"]
    assert len(_links(db, result.zone.id)) == 1


def test_unresolved_names_are_logged(associator, owner, plants, zone_payload, caplog):
    with caplog.at_level("WARNING", logger="garden_crm.services.zone_plants"):
        associator.create_zone_with_plants(ZoneCreate(**zone_payload), ["Triffid"], owner.id)

    assert "Triffid" in caplog.text


def test_name_resolution_is_case_sensitive(associator, plants):
    ids, unresolved = associator.resolve_plant_names(["basil", "Basil"])

    assert ids == [1]
    assert unresolved == ["basil"]


def test_scientific_name_resolves(associator, plants):
    ids, unresolved = associator.resolve_plant_names(["Lavandula angustifolia", "Mint"])

    assert ids == [2, 4]
    assert unresolved == []


def test_ambiguous_common_name_picks_most_popular(associator, plants):
    ids, _ = associator.resolve_plant_names(["Sage"])
    assert ids == [6]


def test_create_requires_existing_client(associator, owner, plants, zone_payload):
    zone_payload["client_id"] = str(uuid.uuid4())

    with pytest.raises(ValidationError) as exc_info:
        associator.create_zone_with_plants(ZoneCreate(**zone_payload), ["Basil"], owner.id)
    assert exc_info.value.field_errors == {"client_id": "Client not found"}


def test_list_zone_plants(associator, owner, zone):
    associator.set_zone_plants(zone.id, [3, 1], owner.id)

    links = associator.list_zone_plants(zone.id, owner.id)
    assert {link.plant_material.common_name for link in links} == {"Basil", "Rosemary"}
