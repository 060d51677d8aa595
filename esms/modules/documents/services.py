"""Document registry kind and the upload store."""

from __future__ import annotations

import logging
import re
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from esms.modules._infra.crud import RecordKind
from esms.modules._infra.errors import ESMSError
from esms.modules.reference import models as reference_models
from esms.utils import app_settings

from . import models, schemas

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

DOCUMENTS = RecordKind(
    resource="documents",
    entity="document",
    model=models.Document,
    create_schema=schemas.DocumentCreate,
    read_schema=schemas.DocumentRead,
    label_field="document_name",
    search_fields=("code", "document_name", "observation"),
    order_by="code",
    links={"document_type": reference_models.DocumentType},
    filter_fields=("document_type_id", "document_state"),
)


def _safe_name(filename: str) -> str:
    name = _UNSAFE_CHARS.sub("_", Path(filename).name).strip("._")
    return name or "file"


def store_upload(upload: UploadFile) -> str:
    """Write ``upload`` to the upload directory and return its public URL."""
    if not upload.filename:
        raise ESMSError("No file provided")
    dest_dir = app_settings.upload_dir()
    dest_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}_{_safe_name(upload.filename)}"
    dest = dest_dir / stored_name
    with dest.open("wb") as f:
        shutil.copyfileobj(upload.file, f)
    logger.info("Stored upload %s (%d bytes)", stored_name, dest.stat().st_size)
    return f"{app_settings.public_url()}/uploads/{stored_name}"
