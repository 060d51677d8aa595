"""REST routes for the reference entities (``/api/<resource>``)."""

from fastapi import APIRouter

from esms.modules._infra.crud import add_crud_routes

from .kinds import REFERENCE_KINDS


def _build_router(kind) -> APIRouter:
    router = APIRouter(prefix=f"/api/{kind.resource}", tags=["reference"])
    return add_crud_routes(router, kind)


routers = [_build_router(kind) for kind in REFERENCE_KINDS.values()]

__all__ = ["routers"]
