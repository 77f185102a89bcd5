"""
Garden CRM API - Visit Model
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base, JSONType

VISIT_STATUSES = ("scheduled", "completed", "cancelled")


class Visit(Base):
    __tablename__ = "visits"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)

    # Zonas incluidas en la visita (lista de ids como texto)
    zones = Column(JSONType, nullable=False, default=list)

    # Planificación
    scheduled_date = Column(DateTime(timezone=True), nullable=False, index=True)
    scheduled_time = Column(String(10), nullable=True)  # "HH:MM"
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="visits")

    def __repr__(self):
        return f"<Visit {self.scheduled_date} ({self.status})>"
