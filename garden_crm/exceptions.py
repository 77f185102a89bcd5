"""
Garden CRM API - Domain Exceptions
Errores de negocio que los routers traducen a respuestas HTTP
"""

from typing import Dict


class GardenCRMError(Exception):
    """Base de todos los errores de dominio"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GardenCRMError):
    """
    Error de validación asociado a campos concretos.
    field_errors: {nombre_campo: mensaje}
    """

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__("Validation failed")
        self.field_errors = dict(field_errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: message})


class DuplicateClientError(GardenCRMError):
    """
    Rechazo por cliente duplicado.
    rule: "name_address" o "contact"
    """

    NAME_ADDRESS = "name_address"
    CONTACT = "contact"

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


class NotFoundError(GardenCRMError):
    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource


class StoreError(GardenCRMError):
    """Fallo del backend de datos. Sin distinción transitorio/permanente."""


class WeatherConfigError(GardenCRMError):
    """Falta la API key de OpenWeather"""
