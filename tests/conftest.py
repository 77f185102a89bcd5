"""
Fixtures compartidos para la suite de Garden CRM.

- BD SQLite en memoria (StaticPool) con todas las tablas creadas
- Sesión inyectada en la app sustituyendo get_db
- Cache de listados nueva por test
- Owner autenticado, catálogo de plantas y un cliente de ejemplo
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("APP_ENV", "test")

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import garden_crm.models  # noqa: F401
from garden_crm.database import Base, get_db
from garden_crm.dependencies import get_list_cache
from garden_crm.main import app
from garden_crm.models import Client, Owner, PlantMaterial
from garden_crm.services.auth import create_tokens, get_password_hash
from garden_crm.services.cache import ListCache

logging.getLogger("garden_crm").setLevel(logging.WARNING)

API = "/api/v1"

CATALOG = [
    # id, common_name, scientific_name, popularity_rank
    (1, "Basil", "Ocimum basilicum", 1),
    (2, "Lavender", "Lavandula angustifolia", 2),
    (3, "Rosemary", "Salvia rosmarinus", 3),
    (4, "Mint", "Mentha spicata", None),
    (5, "Sage", "Salvia officinalis", 10),
    (6, "Sage", "Salvia nemorosa", 5),
]


# ========================== Database Fixtures ==============================


@pytest.fixture()
def engine():
    """SQLite en memoria compartida entre hilos (TestClient usa otro hilo)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def cache():
    return ListCache(enabled=True, ttl_seconds=60, maxsize=64)


# ========================== Seed Fixtures ==================================


@pytest.fixture()
def owner(db):
    owner = Owner(
        email="owner@example.com",
        password_hash=get_password_hash("secret-pass"),
        full_name="Olive Gardener",
    )
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture()
def other_owner(db):
    owner = Owner(email="other@example.com", password_hash=get_password_hash("secret-pass"))
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture()
def plants(db):
    rows = [
        PlantMaterial(id=pid, common_name=common, scientific_name=scientific, popularity_rank=rank)
        for pid, common, scientific, rank in CATALOG
    ]
    db.add_all(rows)
    db.commit()
    return rows


@pytest.fixture()
def client_record(db, owner):
    client = Client(owner_id=owner.id, name="Jane Doe", address="12 Elm St", email="a@x.com")
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


@pytest.fixture()
def zone_payload(client_record):
    return {
        "name": "Front border",
        "client_id": str(client_record.id),
        "soil_type_enum": "Loam",
        "area_size_value": 12.5,
        "area_size_unit": "m²",
        "sun_primary": "Full sun (6+ h)",
        "sun_modifiers": ["Morning sun"],
        "sun_hours_estimate": 7,
    }


# ========================== API Fixtures ===================================


@pytest.fixture()
def api(db, cache):
    """TestClient con la sesión y la cache del test"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_list_cache] = lambda: cache
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(owner):
    access_token, _ = create_tokens(str(owner.id), owner.email)
    return {"Authorization": f"Bearer {access_token}"}
