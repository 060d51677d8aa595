"""FastAPI routes for the document registry and file uploads."""

from fastapi import APIRouter, File, UploadFile, status

from esms.modules._infra.crud import add_crud_routes

from . import services
from .schemas import UploadResult

router = APIRouter(prefix="/api/documents", tags=["documents"])
add_crud_routes(router, services.DOCUMENTS)

upload_router = APIRouter(prefix="/api/upload", tags=["uploads"])


@upload_router.post("", response_model=UploadResult, status_code=status.HTTP_200_OK)
def upload_file(file: UploadFile = File(...)) -> UploadResult:
    return UploadResult(file_url=services.store_upload(file))


routers = [router, upload_router]
