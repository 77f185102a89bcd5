"""
Garden CRM API - Services
"""

from garden_crm.services.auth import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    create_tokens,
    decode_token,
    owner_id_from,
    verify_access_token,
    verify_refresh_token,
)
from garden_crm.services.cache import ListCache
from garden_crm.services.clients import ClientDirectory
from garden_crm.services.zone_plants import ZonePlantAssociator
from garden_crm.services.zones import ZoneService

__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "create_refresh_token",
    "create_tokens",
    "decode_token",
    "owner_id_from",
    "verify_access_token",
    "verify_refresh_token",
    "ListCache",
    "ClientDirectory",
    "ZonePlantAssociator",
    "ZoneService",
]
