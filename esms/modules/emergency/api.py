"""FastAPI routes for incident reports."""

from fastapi import APIRouter

from esms.modules._infra.crud import add_crud_routes

from .services import INCIDENT_REPORTS

router = APIRouter(prefix="/api/incident-reports", tags=["incident-reports"])
add_crud_routes(router, INCIDENT_REPORTS)
