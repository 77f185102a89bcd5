"""
Garden CRM API - Dashboard Router
"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from garden_crm.database import get_db
from garden_crm.dependencies import get_current_owner
from garden_crm.models import Owner
from garden_crm.schemas import DashboardSummary
from garden_crm.services.dashboard import get_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    today: Optional[date] = Query(None),
    current_owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Resumen para la pantalla principal: clientes, zonas, plantas,
    tareas pendientes/vencidas y visitas de hoy
    """
    return get_summary(db, current_owner.id, today)
