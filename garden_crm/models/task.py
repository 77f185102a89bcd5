"""
Garden CRM API - Task Model
"""

from sqlalchemy import Column, String, Boolean, Integer, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base

TASK_PRIORITIES = ("low", "medium", "high")
TASK_STATUSES = ("pending", "in_progress", "completed", "cancelled")


class Task(Base):
    __tablename__ = "tasks"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    zone_id = Column(Uuid(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True)

    # Descripción
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    task_type = Column(String(50), nullable=True)

    # Planificación
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="pending", index=True)
    recurring = Column(Boolean, nullable=False, default=False)
    estimated_time_minutes = Column(Integer, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="tasks")
    zone = relationship("Zone", back_populates="tasks")

    def __repr__(self):
        return f"<Task {self.title} ({self.status})>"
