"""
Garden CRM API - Database Connection
Configuración de SQLAlchemy (PostgreSQL en producción, SQLite en local/tests)
"""

import logging
import sqlite3
from contextlib import contextmanager

from sqlalchemy import JSON, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from garden_crm.config import settings
from garden_crm.exceptions import StoreError

logger = logging.getLogger(__name__)

# JSONB en PostgreSQL, JSON genérico en el resto
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _unicode_lower(value):
    return value.lower() if value is not None else None


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_connection, connection_record):
    """lower() nativo de SQLite solo convierte ASCII ("JOSÉ" -> "josÉ"); se registra str.lower"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def build_engine(database_url: str, echo: bool = False):
    """
    Crea el engine según el backend.
    SQLite necesita check_same_thread=False para usarse desde FastAPI.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
    # NullPool: el pooling lo gestiona el proveedor (serverless)
    return create_engine(database_url, poolclass=NullPool, echo=echo)


engine = build_engine(settings.database_url, echo=settings.debug and not settings.is_sqlite)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base para modelos
Base = declarative_base()


def get_db():
    """
    Dependency para obtener sesión de BD.
    Uso: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Agrupa varias escrituras en una sola transacción.
    Si algo falla se hace rollback completo y se lanza StoreError
    con el mensaje original adjunto.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store operation failed: %s", exc)
        raise StoreError(str(exc)) from exc
    except Exception:
        db.rollback()
        raise


def init_db():
    """
    Inicializa la BD creando todas las tablas.
    Solo usar en desarrollo - en producción usar migraciones.
    """
    import garden_crm.models  # noqa: F401  (registra los modelos en Base)

    Base.metadata.create_all(bind=engine)


def check_db_connection() -> bool:
    """
    Verifica que la conexión a BD funcione.
    Útil para health checks.
    """
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection error: %s", e)
        return False
