"""
Garden CRM API - Zone Model
Área del jardín de un cliente con atributos de suelo/sol/superficie
"""

from sqlalchemy import Column, String, Numeric, Float, Integer, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base, JSONType


class Zone(Base):
    __tablename__ = "zones"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)

    # Identificación
    name = Column(String(255), nullable=False)

    # Suelo
    soil_type_enum = Column(String(20), nullable=True)
    soil_type_other = Column(String(255), nullable=True)
    soil_type = Column(String(100), nullable=True)  # texto libre (legacy)

    # Superficie
    area_size_value = Column(Numeric(10, 2), nullable=True)
    area_size_unit = Column(String(10), nullable=True)
    size = Column(String(100), nullable=True)  # texto libre (legacy)

    # Exposición solar
    sun_primary = Column(String(50), nullable=True)
    sun_modifiers = Column(JSONType, nullable=False, default=list)
    sun_hours_estimate = Column(Float, nullable=True)
    sun_notes = Column(Text, nullable=True)
    sunlight = Column(String(100), nullable=True)  # texto libre (legacy)

    # Riego
    watering_schedule = Column(String(255), nullable=True)
    last_watered_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)

    # Desnormalizado: nº de filas en zone_plant_material
    plant_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="zones")
    plant_links = relationship(
        "ZonePlantMaterial",
        back_populates="zone",
        cascade="all, delete-orphan",
        order_by="ZonePlantMaterial.created_at",
    )
    tasks = relationship("Task", back_populates="zone")
    photos = relationship("Photo", back_populates="zone")

    @property
    def plants(self):
        return [link.plant_material for link in self.plant_links if link.plant_material is not None]

    def __repr__(self):
        return f"<Zone {self.name} ({self.plant_count} plants)>"
