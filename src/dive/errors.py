"""Exceptions raised across Dive."""

from .models import Document


class DiveError(Exception):
    """Base class for Dive errors."""


class ReadError(DiveError):
    """A document exists in the corpus but its content could not be read."""

    def __init__(self, document: Document, reason: str = ""):
        self.document = document
        self.reason = reason
        msg = f"Could not read file: {document.name}"
        super().__init__(f"{msg} ({reason})" if reason else msg)


class ApiError(DiveError):
    """The model call failed. status is None for transport failures."""

    def __init__(self, status: int | None, detail: str = ""):
        self.status = status
        self.detail = detail
        msg = f"API error: {status}" if status is not None else "API request failed"
        super().__init__(f"{msg}: {detail}" if detail else msg)
