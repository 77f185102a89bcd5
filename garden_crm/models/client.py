"""
Garden CRM API - Client Model
"""

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base

CLIENT_STATUSES = ("active", "inactive", "pending")


class Client(Base):
    __tablename__ = "clients"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Foreign key
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False, index=True)

    # Info básica
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=False)

    # Estado
    status = Column(String(20), nullable=False, default="active", index=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("Owner", back_populates="clients")
    zones = relationship("Zone", back_populates="client", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="client", cascade="all, delete-orphan")
    visits = relationship("Visit", back_populates="client", cascade="all, delete-orphan")
    photos = relationship("Photo", back_populates="client", cascade="all, delete-orphan")

    @property
    def last_visit(self):
        """Fecha de la visita más reciente (programada o realizada)"""
        dates = [v.scheduled_date for v in self.visits if v.scheduled_date is not None]
        return max(dates) if dates else None

    def __repr__(self):
        return f"<Client {self.name}>"
