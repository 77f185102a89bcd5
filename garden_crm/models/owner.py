"""
Garden CRM API - Owner Model
Cuenta autenticada bajo la que se agrupan todos los datos
"""

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from garden_crm.database import Base


class Owner(Base):
    __tablename__ = "owners"

    # Primary key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Auth
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Info básica
    full_name = Column(String(255), nullable=True)
    company = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    clients = relationship("Client", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Owner {self.email}>"
