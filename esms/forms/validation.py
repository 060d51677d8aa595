"""Client-side validation against the shared pydantic schemas."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError

from esms.modules._infra.validators import error_fields


def check(schema: type, data: Mapping[str, Any]) -> Tuple[Optional[BaseModel], Dict[str, str]]:
    """Validate ``data``; return the model and no errors, or ``None`` and field errors."""
    try:
        return schema.model_validate(dict(data)), {}
    except ValidationError as exc:
        return None, error_fields(exc.errors())
