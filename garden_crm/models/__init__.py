"""
Garden CRM API - SQLAlchemy Models
"""

from garden_crm.models.owner import Owner
from garden_crm.models.client import Client
from garden_crm.models.zone import Zone
from garden_crm.models.plant_material import PlantMaterial
from garden_crm.models.zone_plant_material import ZonePlantMaterial
from garden_crm.models.task import Task
from garden_crm.models.visit import Visit
from garden_crm.models.photo import Photo

__all__ = [
    "Owner",
    "Client",
    "Zone",
    "PlantMaterial",
    "ZonePlantMaterial",
    "Task",
    "Visit",
    "Photo",
]
