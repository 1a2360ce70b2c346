"""Translation of service results into HTTP responses.

Routers never build error bodies themselves; every failure goes through
:func:`failure_response` so that the status codes and the
``{"error": ..., "reasons": {...}}`` body shape stay consistent.
"""

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from loguru import logger

from . import results

UNEXPECTED_MESSAGE = "An unexpected error occurred whilst processing the request"


def error_response(
    status_code: int, error: str, reasons: dict[str, str] | None = None
) -> JSONResponse:
    """
    Build an error response.

    Args:
        status_code (int): HTTP status.
        error (str): Short description of the failure.
        reasons (dict | None): Optional field name to message mapping.

    Returns:
        JSONResponse: Response with the error body.
    """
    body = {"error": error}
    if reasons:
        body["reasons"] = reasons
    return JSONResponse(status_code=status_code, content=body)


def failure_response(outcome) -> JSONResponse:
    """Map a failed result to its HTTP status and body."""
    if isinstance(outcome, results.StructuralViolation):
        return error_response(
            status.HTTP_400_BAD_REQUEST, "Bad Request", dict(outcome.reasons)
        )
    if isinstance(outcome, results.UniquenessViolation):
        return error_response(
            status.HTTP_409_CONFLICT, "Conflict", {outcome.field: outcome.message}
        )
    if isinstance(outcome, results.ReferenceNotFound):
        return error_response(
            status.HTTP_400_BAD_REQUEST, outcome.message, {outcome.field: outcome.message}
        )
    if isinstance(outcome, results.NotFound):
        return error_response(status.HTTP_404_NOT_FOUND, outcome.message)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_MESSAGE)


def to_response(outcome, schema=None, status_code: int = status.HTTP_200_OK) -> Response:
    """
    Turn a service result into a response.

    Args:
        outcome: Result returned by a service call.
        schema: Pydantic model used to render ``Ok`` values.
        status_code (int): Status used when ``outcome`` is ``Ok``.

    Returns:
        Response: The entity rendered with ``schema``, an empty response
        for 204, or the mapped error response.
    """
    if not isinstance(outcome, results.Ok):
        return failure_response(outcome)
    if status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status_code)
    return render(outcome.value, schema, status_code)


def render(value, schema, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Render an entity, or a list of entities, through ``schema``."""
    if isinstance(value, list):
        content = [schema.model_validate(item) for item in value]
    else:
        content = schema.model_validate(value)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report undecodable or wrongly typed requests as 400 with field reasons."""
    reasons = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        reasons[".".join(location) or "body"] = error.get("msg", "Invalid value")
    logger.info("Rejected malformed request to {}: {}", request.url.path, reasons)
    return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request", reasons)
