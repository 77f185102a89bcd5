"""
Garden CRM API - Clients Router
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner, get_list_cache
from garden_crm.models import Owner
from garden_crm.schemas import ClientCreate, ClientResponse, ClientUpdate, MessageResponse
from garden_crm.services.cache import ListCache
from garden_crm.services.clients import ClientDirectory

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_directory(
    db: Session = Depends(get_db),
    cache: ListCache = Depends(get_list_cache),
) -> ClientDirectory:
    return ClientDirectory(db, cache)


@router.get("", response_model=List[ClientResponse])
def list_clients(
    current_owner: Owner = Depends(get_current_owner),
    directory: ClientDirectory = Depends(get_directory)
):
    """
    Clientes de la cuenta, más recientes primero
    """
    return directory.list_clients(current_owner.id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client: ClientCreate,
    current_owner: Owner = Depends(get_current_owner),
    directory: ClientDirectory = Depends(get_directory)
):
    """
    Crea un cliente. Responde 409 si se detecta un duplicado
    (nombre+dirección o email/teléfono).
    """
    return directory.create_client(current_owner.id, client)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    directory: ClientDirectory = Depends(get_directory)
):
    return directory.get_client(current_owner.id, client_id)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: UUID,
    client_update: ClientUpdate,
    current_owner: Owner = Depends(get_current_owner),
    directory: ClientDirectory = Depends(get_directory)
):
    """
    Actualiza solo los campos proporcionados
    """
    return directory.update_client(current_owner.id, client_id, client_update)


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(
    client_id: UUID,
    current_owner: Owner = Depends(get_current_owner),
    directory: ClientDirectory = Depends(get_directory)
):
    """
    Borrado definitivo del cliente y de todo lo que cuelga de él
    """
    directory.delete_client(current_owner.id, client_id)
    return {"message": "Client deleted"}
