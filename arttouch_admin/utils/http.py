from fastapi import HTTPException

from arttouch_admin.services.results import OperationResult, Outcome

STATUS_CODES = {
    Outcome.VALIDATION_ERROR: 400,
    Outcome.NOT_FOUND: 404,
    Outcome.CONFLICT: 409,
    Outcome.STORAGE_ERROR: 500,
}


def unwrap(result: OperationResult):
    """Return the payload of a successful result, raise the matching HTTPException otherwise."""
    if result.ok:
        return result.payload
    detail = {"message": result.message}
    if result.field_errors:
        detail["errors"] = result.field_errors
    raise HTTPException(status_code=STATUS_CODES[result.outcome], detail=detail)
