"""Domain exceptions raised by the register services."""

from __future__ import annotations


class ESMSError(Exception):
    """Base error; ``status_code`` is used when rendering the REST response."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ESMSError):
    status_code = 404


class ReferenceInUseError(ESMSError):
    """Raised when deleting a reference entity that parent records still use."""

    status_code = 409

    def __init__(self, message: str, usages: int):
        super().__init__(message)
        self.usages = usages


class UnknownReferenceError(ESMSError):
    """Raised when a payload links to an id that does not exist."""

    status_code = 400
