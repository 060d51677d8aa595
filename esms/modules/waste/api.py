"""FastAPI routes for the waste registers."""

from fastapi import APIRouter, Request

from esms.modules._infra.crud import add_crud_routes

from . import services

transfer_router = APIRouter(prefix="/api/waste-transfer-log", tags=["waste-transfer-log"])
management_router = APIRouter(prefix="/api/waste-management", tags=["waste-management"])


@transfer_router.get("/totals")
def totals(request: Request) -> dict:
    filters = {
        name: value
        for name, value in request.query_params.items()
        if name in services.WASTE_TRANSFER_LOG.filter_fields and value != ""
    }
    return services.transferred_totals(filters=filters)


add_crud_routes(transfer_router, services.WASTE_TRANSFER_LOG)
add_crud_routes(management_router, services.WASTE_MANAGEMENT)

routers = [transfer_router, management_router]
