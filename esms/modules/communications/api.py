"""FastAPI routes for worker grievances and complaints."""

from fastapi import APIRouter

from esms.modules._infra.crud import add_crud_routes

from .services import COMPLAINTS, WORKER_GRIEVANCES

grievance_router = APIRouter(prefix="/api/worker-grievances", tags=["worker-grievances"])
add_crud_routes(grievance_router, WORKER_GRIEVANCES)

complaint_router = APIRouter(prefix="/api/complaints", tags=["complaints"])
add_crud_routes(complaint_router, COMPLAINTS)

routers = [grievance_router, complaint_router]
