"""
Garden CRM API - Weather Router
Proxy hacia OpenWeather para no exponer la API key al cliente
"""

import httpx
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from garden_crm.dependencies import get_current_owner
from garden_crm.models import Owner
from garden_crm.schemas import WeatherRequest
from garden_crm.services.weather import LOCATION_MESSAGE, fetch_weather, has_location

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.post("")
async def get_weather(
    request: WeatherRequest,
    current_owner: Owner = Depends(get_current_owner)
):
    """
    Tiempo actual o previsión por ciudad o coordenadas.
    El status y el cuerpo de OpenWeather se devuelven sin tocar.
    """
    if not has_location(request):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": LOCATION_MESSAGE})

    try:
        status_code, content = await fetch_weather(request)
    except httpx.HTTPError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Unexpected error", "details": str(e)}
        )

    return Response(content=content, status_code=status_code, media_type="application/json")
