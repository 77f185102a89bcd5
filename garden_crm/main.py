"""
Garden CRM API - Main Application
FastAPI backend para la gestión de clientes, zonas y plantas de jardín
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging
import time

from garden_crm.config import settings
from garden_crm.database import check_db_connection, init_db
from garden_crm.exceptions import (
    DuplicateClientError, NotFoundError, StoreError, ValidationError, WeatherConfigError
)
from garden_crm.logging_config import setup_logging
from garden_crm.routers import (
    auth_router,
    clients_router,
    zones_router,
    plant_material_router,
    tasks_router,
    visits_router,
    photos_router,
    weather_router,
    dashboard_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events: startup y shutdown
    """
    setup_logging(settings.log_level)
    logger.info("Starting %s...", settings.app_name)

    if not settings.is_production:
        init_db()

    if check_db_connection():
        logger.info("Database connection OK")
    else:
        logger.error("Database connection FAILED")

    yield

    logger.info("Shutting down %s...", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="API backend para Garden CRM - clientes, zonas de jardín, plantas, tareas y visitas",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

def _field_name(loc) -> str:
    """("body", "sun_modifiers", 1) -> "sun_modifiers" """
    parts = [p for p in loc if isinstance(p, str) and p not in ("body", "query", "path")]
    return parts[-1] if parts else "request"


def _clean_message(msg: str) -> str:
    prefix = "Value error, "
    return msg[len(prefix):] if msg.startswith(prefix) else msg


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "errors": exc.field_errors}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Errores de pydantic con el mismo formato que ValidationError:
    un mensaje por campo
    """
    errors = {}
    for error in exc.errors():
        errors.setdefault(_field_name(error.get("loc", ())), _clean_message(error.get("msg", "")))
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation failed", "errors": errors}
    )


@app.exception_handler(DuplicateClientError)
async def duplicate_client_handler(request: Request, exc: DuplicateClientError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message, "rule": exc.rule}
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message}
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Operation failed", "error": exc.message}
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled database error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Operation failed", "error": str(exc)}
    )


@app.exception_handler(WeatherConfigError)
async def weather_config_handler(request: Request, exc: WeatherConfigError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handler global para excepciones no controladas
    """
    logger.exception("Unhandled error on %s", request.url.path)
    if settings.debug:
        return JSONResponse(
            status_code=500,
            content={
                "detail": str(exc),
                "type": type(exc).__name__
            }
        )
    else:
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )


# Root endpoint
@app.get("/")
async def root():
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs" if settings.debug else "disabled"
    }


# Health check
@app.get("/health")
async def health_check():
    db_ok = check_db_connection()
    return {
        "status": "healthy" if db_ok else "unhealthy",
        "database": "connected" if db_ok else "disconnected",
        "environment": settings.app_env
    }


# Incluir routers
for router in (
    auth_router,
    clients_router,
    zones_router,
    plant_material_router,
    tasks_router,
    visits_router,
    photos_router,
    weather_router,
    dashboard_router,
):
    app.include_router(router, prefix=f"/api/{settings.api_version}")


# Para desarrollo local
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "garden_crm.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
