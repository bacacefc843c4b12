"""Tagged results returned across the service boundary.

Every admin operation returns an ``OperationResult`` instead of raising, so
the presentation layer only has to map an outcome to a response.
"""
from dataclasses import dataclass, field
from enum import Enum
import functools
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from arttouch_admin.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    OK = "ok"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_ERROR = "storage_error"


@dataclass
class OperationResult:
    outcome: Outcome
    message: str = ""
    payload: Any = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, payload: Any = None, message: str = "") -> "OperationResult":
        return cls(Outcome.OK, message, payload)

    @classmethod
    def failure(cls, outcome: Outcome, message: str, field_errors: Optional[Dict[str, str]] = None) -> "OperationResult":
        return cls(outcome, message, None, dict(field_errors or {}))


def reported(action: str, success_message: str = ""):
    """Run the wrapped service call and convert its failures into an ``OperationResult``.

    ``action`` names the operation in logs and in the generic storage failure
    message ("Error creating product. Please try again.").
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                payload = func(*args, **kwargs)
            except ValidationError as e:
                logger.warning("%s rejected: %s %s", action, e.message, e.field_errors)
                return OperationResult.failure(Outcome.VALIDATION_ERROR, e.message, e.field_errors)
            except NotFoundError as e:
                logger.warning("%s: %s", action, e.message)
                return OperationResult.failure(Outcome.NOT_FOUND, e.message)
            except ConflictError as e:
                logger.warning("%s refused: %s", action, e.message)
                return OperationResult.failure(Outcome.CONFLICT, e.message)
            except (StorageError, SQLAlchemyError, OSError) as e:
                logger.error("Error %s: %s", action, e, exc_info=True)
                return OperationResult.failure(Outcome.STORAGE_ERROR, f"Error {action}. Please try again.")
            except Exception as e:
                # Anything unexpected is still reported, never raised to the caller
                logger.error("Unexpected error %s: %s", action, e, exc_info=True)
                return OperationResult.failure(Outcome.STORAGE_ERROR, f"Error {action}. Please try again.")
            return OperationResult.success(payload, success_message)

        return wrapper

    return decorator
