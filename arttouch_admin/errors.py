"""Failure taxonomy shared by the admin services.

Services raise these; the ``reported`` boundary in
``arttouch_admin.services.results`` turns them into an ``OperationResult``.
"""
from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for every failure an admin operation can report."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Malformed or missing input. ``field_errors`` maps field name -> problem."""

    def __init__(self, field_errors: Dict[str, str], message: Optional[str] = None):
        self.field_errors = dict(field_errors)
        if message is None:
            message = "Invalid input: " + ", ".join(sorted(self.field_errors))
        super().__init__(message)


class NotFoundError(CatalogError):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(CatalogError):
    """The operation would break a guarded invariant (or lost a concurrent race)."""


class StorageError(CatalogError):
    """Database or blob store I/O failed."""
