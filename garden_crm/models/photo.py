"""
Garden CRM API - Photo Model
Metadatos de la foto; el fichero vive en el storage externo
"""

from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base, JSONType


class Photo(Base):
    __tablename__ = "photos"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    zone_id = Column(Uuid(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True)
    plant_id = Column(Integer, ForeignKey("plantmaterial.id", ondelete="SET NULL"), nullable=True)

    # Fichero
    file_path = Column(String(500), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(JSONType, nullable=False, default=list)
    taken_at = Column(DateTime(timezone=True), server_default=func.now())

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="photos")
    zone = relationship("Zone", back_populates="photos")

    def __repr__(self):
        return f"<Photo {self.title}>"
