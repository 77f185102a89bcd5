"""
Garden CRM API - Pydantic Schemas
Validación de datos de entrada/salida
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID


# ============================================================================
# CONSTANTES DE FORMULARIO
# ============================================================================

SOIL_TYPES = ("Clay", "Loam", "Sand", "Silt", "Chalk", "Peat", "Other")
AREA_SIZE_UNITS = ("m²", "ft²", "acre")
# La columna es Numeric(10, 2): dos decimales, máximo 99 999 999.99
AREA_MIN = 0.01
AREA_MAX = 99_999_999.99
# Escala ordenada de más a menos sol
SUN_EXPOSURES = (
    "Full sun (6+ h)",
    "Partial sun (3–6 h)",
    "Partial shade (3–6 h filtered)",
    "Dappled shade",
    "Full shade (<3 h)",
)
SUN_MODIFIERS = (
    "Morning sun",
    "Afternoon sun",
    "East-facing",
    "South-facing",
    "West-facing",
    "North-facing",
    "Wind-exposed",
    "Sheltered",
)

SoilType = Literal["Clay", "Loam", "Sand", "Silt", "Chalk", "Peat", "Other"]
AreaSizeUnit = Literal["m²", "ft²", "acre"]
SunExposure = Literal[
    "Full sun (6+ h)",
    "Partial sun (3–6 h)",
    "Partial shade (3–6 h filtered)",
    "Dappled shade",
    "Full shade (<3 h)",
]
SunModifier = Literal[
    "Morning sun",
    "Afternoon sun",
    "East-facing",
    "South-facing",
    "West-facing",
    "North-facing",
    "Wind-exposed",
    "Sheltered",
]

ClientStatus = Literal["active", "inactive", "pending"]
Priority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed", "cancelled"]
VisitStatus = Literal["scheduled", "completed", "cancelled"]

SOIL_OTHER_MESSAGE = 'Please specify the soil type when "Other" is selected'


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = None
    company: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str


class OwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: Optional[str] = None
    company: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


# ============================================================================
# REFERENCIAS ANIDADAS
# ============================================================================

class ClientRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: Optional[str] = None


class ZoneRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


# ============================================================================
# CLIENT SCHEMAS
# ============================================================================

class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., max_length=500)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    status: ClientStatus = "active"
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    status: Optional[ClientStatus] = None
    notes: Optional[str] = None


class ClientResponse(ClientBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    zones: List[ZoneRef] = []
    last_visit: Optional[datetime] = None


# ============================================================================
# PLANT MATERIAL SCHEMAS
# ============================================================================

class PlantMaterialSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    common_name: Optional[str] = None
    scientific_name: Optional[str] = None
    popularity_rank: Optional[int] = None


class PlantMaterialResponse(PlantMaterialSummary):
    category: Optional[str] = None
    soil: Optional[str] = None
    position: Optional[str] = None
    watering: Optional[str] = None
    pruning: Optional[str] = None
    fertiliser: Optional[str] = None
    planting_time: Optional[str] = None
    flowering_period: Optional[str] = None
    propagation: Optional[str] = None
    pests_diseases: Optional[str] = None
    notes: Optional[str] = None


# ============================================================================
# ZONE SCHEMAS
# ============================================================================

class ZoneForm(BaseModel):
    """
    Formulario de zona. Todos los errores se reportan por campo,
    incluido el cruce soil_type_enum/soil_type_other.
    """
    name: str
    client_id: UUID
    soil_type_enum: SoilType
    soil_type_other: Optional[str] = Field(None, validate_default=True)
    area_size_value: float = Field(..., ge=AREA_MIN, le=AREA_MAX)
    area_size_unit: AreaSizeUnit
    sun_primary: SunExposure
    sun_modifiers: List[SunModifier] = []
    sun_hours_estimate: Optional[float] = Field(None, ge=0, le=24)
    sun_notes: Optional[str] = None
    watering_schedule: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Zone name is required")
        return value.strip()

    @field_validator("soil_type_other")
    @classmethod
    def soil_other_required(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("soil_type_enum") == "Other" and not (value or "").strip():
            raise ValueError(SOIL_OTHER_MESSAGE)
        return value


class ZoneCreate(ZoneForm):
    # Nombres tal y como los selecciona el usuario (common o scientific)
    plant_names: List[str] = []


class ZoneUpdate(BaseModel):
    name: Optional[str] = None
    soil_type_enum: Optional[SoilType] = None
    soil_type_other: Optional[str] = None
    area_size_value: Optional[float] = Field(None, ge=AREA_MIN, le=AREA_MAX)
    area_size_unit: Optional[AreaSizeUnit] = None
    sun_primary: Optional[SunExposure] = None
    sun_modifiers: Optional[List[SunModifier]] = None
    sun_hours_estimate: Optional[float] = Field(None, ge=0, le=24)
    sun_notes: Optional[str] = None
    watering_schedule: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Zone name is required")
        return value.strip() if value is not None else None


class ZoneResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    client_id: UUID
    name: str
    soil_type_enum: Optional[str] = None
    soil_type_other: Optional[str] = None
    soil_type: Optional[str] = None
    area_size_value: Optional[float] = None
    area_size_unit: Optional[str] = None
    size: Optional[str] = None
    sun_primary: Optional[str] = None
    sun_modifiers: List[str] = []
    sun_hours_estimate: Optional[float] = None
    sun_notes: Optional[str] = None
    sunlight: Optional[str] = None
    watering_schedule: Optional[str] = None
    last_watered_at: Optional[datetime] = None
    notes: Optional[str] = None
    plant_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[ClientRef] = None
    plants: List[PlantMaterialSummary] = []


class ZonePlantsUpdate(BaseModel):
    plant_ids: List[int] = []


class ZonePlantLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    zone_id: UUID
    plantmaterial_id: int
    quantity: Optional[int] = None
    notes: Optional[str] = None
    plant_material: PlantMaterialSummary


class ZonePlantsResult(BaseModel):
    zone_id: UUID
    plant_ids: List[int]
    plant_count: int


class ZoneCreateResult(BaseModel):
    """Creación parcial: se informa de los nombres que no se resolvieron"""
    zone: ZoneResponse
    linked_plant_ids: List[int]
    unresolved_plant_names: List[str] = []


# ============================================================================
# TASK SCHEMAS
# ============================================================================

class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    task_type: Optional[str] = None
    due_date: datetime
    priority: Priority = "medium"
    status: TaskStatus = "pending"
    recurring: bool = False
    estimated_time_minutes: Optional[int] = Field(None, ge=0)


class TaskCreate(TaskBase):
    client_id: UUID
    zone_id: Optional[UUID] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    task_type: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    recurring: Optional[bool] = None
    estimated_time_minutes: Optional[int] = Field(None, ge=0)
    zone_id: Optional[UUID] = None


class TaskResponse(TaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    client_id: UUID
    zone_id: Optional[UUID] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[ClientRef] = None
    zone: Optional[ZoneRef] = None


# ============================================================================
# VISIT SCHEMAS
# ============================================================================

class VisitBase(BaseModel):
    scheduled_date: datetime
    scheduled_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    priority: Priority = "medium"
    status: VisitStatus = "scheduled"
    notes: Optional[str] = None


class VisitCreate(VisitBase):
    client_id: UUID
    zones: List[UUID] = []


class VisitUpdate(BaseModel):
    scheduled_date: Optional[datetime] = None
    scheduled_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    priority: Optional[Priority] = None
    status: Optional[VisitStatus] = None
    notes: Optional[str] = None
    zones: Optional[List[UUID]] = None


class VisitResponse(VisitBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    client_id: UUID
    zones: List[UUID] = []
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    client: Optional[ClientRef] = None


# ============================================================================
# PHOTO SCHEMAS
# ============================================================================

class PhotoCreate(BaseModel):
    client_id: UUID
    zone_id: Optional[UUID] = None
    plant_id: Optional[int] = None
    file_path: str = Field(..., min_length=1, max_length=500)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    tags: List[str] = []
    taken_at: Optional[datetime] = None


class PhotoUpdate(BaseModel):
    zone_id: Optional[UUID] = None
    plant_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    taken_at: Optional[datetime] = None


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    client_id: UUID
    zone_id: Optional[UUID] = None
    plant_id: Optional[int] = None
    file_path: str
    title: str
    description: Optional[str] = None
    tags: List[str] = []
    taken_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    client: Optional[ClientRef] = None
    zone: Optional[ZoneRef] = None


# ============================================================================
# WEATHER SCHEMAS
# ============================================================================

class WeatherRequest(BaseModel):
    city: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)
    endpoint: Literal["weather", "forecast"] = "weather"
    units: Literal["metric", "imperial"] = "metric"


# ============================================================================
# DASHBOARD SCHEMAS
# ============================================================================

class DashboardSummary(BaseModel):
    """Resumen general para el dashboard principal"""
    total_clients: int
    active_clients: int
    total_zones: int
    total_plants: int
    pending_tasks: int
    overdue_tasks: int
    visits_today: int


# ============================================================================
# GENERIC RESPONSES
# ============================================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
