"""FastAPI routes for the training matrix."""

from fastapi import APIRouter

from esms.modules._infra.crud import add_crud_routes

from .services import TRAINING_MATRIX

router = APIRouter(prefix="/api/training-matrix", tags=["training-matrix"])
add_crud_routes(router, TRAINING_MATRIX)
