"""HTTP error mapping.

Every failure leaves as ``{"error": {"code": ..., "message": ...}}`` with the
status its ``ErrorKind`` maps to. Protean's stock handlers are installed
first so framework errors without a delivery mapping are still covered.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from delivery.errors import DeliveryError, ErrorKind

logger = structlog.get_logger(__name__)


def error_body(kind: ErrorKind, message: str, **extra) -> dict:
    return {"error": {"code": kind.value, "message": message, **extra}}


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(DeliveryError)
    async def delivery_error_handler(request: Request, exc: DeliveryError) -> JSONResponse:
        return JSONResponse(status_code=exc.http_status, content=error_body(exc.kind, exc.detail))

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorKind.INVALID_INPUT, "Invalid input", fields=exc.messages),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = {".".join(str(p) for p in err["loc"]): err["msg"] for err in exc.errors()}
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorKind.INVALID_INPUT, "Invalid input", fields=fields),
        )

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.error("version_conflict_unresolved", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=500,
            content=error_body(ErrorKind.INTERNAL_ERROR, "The request conflicted with a concurrent update"),
        )
