"""
Garden CRM API - Routers
"""

from garden_crm.routers.auth import router as auth_router
from garden_crm.routers.clients import router as clients_router
from garden_crm.routers.zones import router as zones_router
from garden_crm.routers.plant_material import router as plant_material_router
from garden_crm.routers.tasks import router as tasks_router
from garden_crm.routers.visits import router as visits_router
from garden_crm.routers.photos import router as photos_router
from garden_crm.routers.weather import router as weather_router
from garden_crm.routers.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "clients_router",
    "zones_router",
    "plant_material_router",
    "tasks_router",
    "visits_router",
    "photos_router",
    "weather_router",
    "dashboard_router",
]
