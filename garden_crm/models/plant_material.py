"""
Garden CRM API - PlantMaterial Model
Catálogo de referencia hortícola, compartido y de solo lectura
"""

from sqlalchemy import Column, String, Integer, Text
from sqlalchemy.orm import relationship

from garden_crm.database import Base


class PlantMaterial(Base):
    __tablename__ = "plantmaterial"

    id = Column(Integer, primary_key=True)

    # Identificación
    common_name = Column(String(255), nullable=True, index=True)
    scientific_name = Column(String(255), nullable=True, index=True)
    popularity_rank = Column(Integer, nullable=True)
    category = Column(String(100), nullable=True)

    # Ficha hortícola
    soil = Column(Text, nullable=True)
    position = Column(Text, nullable=True)
    watering = Column(Text, nullable=True)
    pruning = Column(Text, nullable=True)
    fertiliser = Column(Text, nullable=True)
    planting_time = Column(Text, nullable=True)
    flowering_period = Column(Text, nullable=True)
    propagation = Column(Text, nullable=True)
    pests_diseases = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    zone_links = relationship("ZonePlantMaterial", back_populates="plant_material")

    @property
    def label(self) -> str:
        return self.common_name or self.scientific_name or f"#{self.id}"

    def __repr__(self):
        return f"<PlantMaterial {self.label}>"
