"""Asyncio form controllers that drive the register REST API.

They hold form state and expose the operations a view layer binds to:
loading reference lists, picking or creating linked entities, submitting
parent records, and browsing record lists.
"""

from .form import LinkLedger, ParentForm, ReadOnlyFieldError
from .client import ApiClient, ApiError
from .listing import RecordList
from .notify import Notifier
from .resolver import CreateDialog, LinkedEntitySlot, SlotState

__all__ = [
    "ApiClient",
    "ApiError",
    "CreateDialog",
    "LinkLedger",
    "LinkedEntitySlot",
    "Notifier",
    "ParentForm",
    "ReadOnlyFieldError",
    "RecordList",
    "SlotState",
]
