"""
Garden CRM API - Weather proxy
Reenvía la consulta a OpenWeather y devuelve la respuesta tal cual.
Sin cache ni reintentos.
"""

import logging
from typing import Optional, Tuple

import httpx

from garden_crm.config import settings
from garden_crm.exceptions import WeatherConfigError
from garden_crm.schemas import WeatherRequest

logger = logging.getLogger(__name__)

LOCATION_MESSAGE = "Provide either 'city' or both 'lat' and 'lon'."


def has_location(request: WeatherRequest) -> bool:
    return bool(request.city) or (request.lat is not None and request.lon is not None)


def build_params(request: WeatherRequest, api_key: str) -> dict:
    params = {"appid": api_key, "units": request.units}
    if request.city:
        params["q"] = request.city
    else:
        params["lat"] = str(request.lat)
        params["lon"] = str(request.lon)
    return params


async def fetch_weather(
    request: WeatherRequest,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Tuple[int, bytes]:
    """
    Devuelve (status, body) de OpenWeather sin modificar.
    transport permite inyectar un MockTransport en tests.
    """
    if not settings.openweather_api_key:
        raise WeatherConfigError("Server misconfigured: missing OPENWEATHER_API_KEY")

    url = f"{settings.openweather_base_url.rstrip('/')}/{request.endpoint}"
    params = build_params(request, settings.openweather_api_key)

    async with httpx.AsyncClient(transport=transport, timeout=settings.weather_timeout_seconds) as client:
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("OpenWeather request failed: %s", e)
            raise

    if response.status_code != 200:
        logger.warning("OpenWeather returned %s for %s", response.status_code, request.endpoint)
    return response.status_code, response.content
