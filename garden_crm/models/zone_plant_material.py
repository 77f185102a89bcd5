"""
Garden CRM API - ZonePlantMaterial Model
Tabla puente zona <-> planta del catálogo
"""

from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base


class ZonePlantMaterial(Base):
    __tablename__ = "zone_plantmaterial"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    zone_id = Column(Uuid(as_uuid=True), ForeignKey("zones.id", ondelete="CASCADE"), nullable=False, index=True)
    plantmaterial_id = Column(Integer, ForeignKey("plantmaterial.id"), nullable=False)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    zone = relationship("Zone", back_populates="plant_links")
    plant_material = relationship("PlantMaterial", back_populates="zone_links")

    def __repr__(self):
        return f"<ZonePlantMaterial zone={self.zone_id} plant={self.plantmaterial_id}>"
