"""
Garden CRM API - Client Directory
Alta/edición/baja de clientes con detección de duplicados antes de insertar
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from garden_crm.database import unit_of_work
from garden_crm.exceptions import DuplicateClientError, NotFoundError, ValidationError
from garden_crm.models import Client
from garden_crm.schemas import ClientCreate, ClientResponse, ClientUpdate
from garden_crm.services.cache import ListCache

logger = logging.getLogger(__name__)

NAME_ADDRESS_MESSAGE = "A client with the same name and address already exists."
CONTACT_MESSAGE = "A client with the same email or phone already exists."

# Listados cacheados que muestran datos del cliente (nombre incluido)
CLIENT_LISTS = ("clients", "zones", "tasks", "visits")


def _clean(value: Optional[str]) -> str:
    """Solo se recortan los extremos; los espacios internos no se normalizan"""
    return (value or "").strip()


class ClientDirectory:
    def __init__(self, db: Session, cache: Optional[ListCache] = None):
        self.db = db
        self.cache = cache

    # ------------------------------------------------------------------
    # Lecturas
    # ------------------------------------------------------------------

    def list_clients(self, owner_id: UUID) -> List[ClientResponse]:
        """Clientes del owner, más recientes primero, con zonas y última visita"""
        def load():
            clients = (
                self.db.query(Client)
                .options(selectinload(Client.zones), selectinload(Client.visits))
                .filter(Client.owner_id == owner_id)
                .order_by(Client.created_at.desc())
                .all()
            )
            return [ClientResponse.model_validate(c) for c in clients]

        if self.cache is None:
            return load()
        return self.cache.get(ListCache.key(owner_id, "clients"), load)

    def get_client(self, owner_id: UUID, client_id: UUID) -> Client:
        client = self.db.query(Client).filter(
            Client.id == client_id,
            Client.owner_id == owner_id
        ).first()

        if not client:
            raise NotFoundError("Client")
        return client

    # ------------------------------------------------------------------
    # Detección de duplicados
    # ------------------------------------------------------------------

    def check_duplicates(
        self,
        owner_id: UUID,
        name: str,
        address: str,
        email: str,
        phone: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """
        Lanza DuplicateClientError si:
          1) nombre Y dirección coinciden (sin distinguir mayúsculas), o
          2) email O teléfono coinciden (solo los que se hayan indicado).
        """
        base = self.db.query(Client.id).filter(Client.owner_id == owner_id)
        if exclude_id is not None:
            base = base.filter(Client.id != exclude_id)

        if name and address:
            match = base.filter(
                func.lower(Client.name) == name.lower(),
                func.lower(Client.address) == address.lower(),
            ).first()
            if match:
                logger.info("Duplicate client rejected (name+address) for owner %s", owner_id)
                raise DuplicateClientError(DuplicateClientError.NAME_ADDRESS, NAME_ADDRESS_MESSAGE)

        contact_filters = []
        if email:
            contact_filters.append(func.lower(Client.email) == email.lower())
        if phone:
            contact_filters.append(func.lower(Client.phone) == phone.lower())

        if contact_filters:
            match = base.filter(or_(*contact_filters)).first()
            if match:
                logger.info("Duplicate client rejected (contact) for owner %s", owner_id)
                raise DuplicateClientError(DuplicateClientError.CONTACT, CONTACT_MESSAGE)

    # ------------------------------------------------------------------
    # Escrituras
    # ------------------------------------------------------------------

    def create_client(self, owner_id: UUID, data: ClientCreate) -> Client:
        name = _clean(data.name)
        address = _clean(data.address)
        email = _clean(data.email)
        phone = _clean(data.phone)

        if not name:
            raise ValidationError.single("name", "Client name is required")

        self.check_duplicates(owner_id, name, address, email, phone)

        client = Client(
            owner_id=owner_id,
            name=name,
            address=address,
            email=email or None,
            phone=phone or None,
            status=data.status,
            notes=data.notes,
        )

        with unit_of_work(self.db):
            self.db.add(client)
        self.db.refresh(client)

        self._invalidate(owner_id, "clients")
        logger.info("Client %s created for owner %s", client.id, owner_id)
        return client

    def update_client(self, owner_id: UUID, client_id: UUID, data: ClientUpdate) -> Client:
        """
        Patch parcial. Si cambia algún campo de identidad se repite la
        detección de duplicados sobre el registro resultante, excluyendo
        el propio cliente.
        """
        client = self.get_client(owner_id, client_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("status", "") is None:
            update_data.pop("status")

        for field in ("name", "address", "email", "phone"):
            if field in update_data:
                update_data[field] = _clean(update_data[field])

        if "name" in update_data and not update_data["name"]:
            raise ValidationError.single("name", "Client name is required")

        if any(field in update_data for field in ("name", "address", "email", "phone")):
            self.check_duplicates(
                owner_id,
                update_data.get("name", _clean(client.name)),
                update_data.get("address", _clean(client.address)),
                update_data.get("email", _clean(client.email)),
                update_data.get("phone", _clean(client.phone)),
                exclude_id=client.id,
            )

        for field in ("email", "phone"):
            if field in update_data and not update_data[field]:
                update_data[field] = None

        with unit_of_work(self.db):
            for field, value in update_data.items():
                setattr(client, field, value)
        self.db.refresh(client)

        self._invalidate(owner_id, *CLIENT_LISTS)
        return client

    def delete_client(self, owner_id: UUID, client_id: UUID) -> None:
        """Borrado definitivo; zonas, tareas, visitas y fotos caen en cascada"""
        client = self.get_client(owner_id, client_id)

        with unit_of_work(self.db):
            self.db.delete(client)

        self._invalidate(owner_id, *CLIENT_LISTS)
        logger.info("Client %s deleted for owner %s", client_id, owner_id)

    def _invalidate(self, owner_id: UUID, *resources: str) -> None:
        if self.cache is not None:
            self.cache.invalidate(owner_id, *resources)
