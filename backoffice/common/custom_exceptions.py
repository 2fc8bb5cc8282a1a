from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.common import logger
from backoffice.common.utils import build_error, json_error
from backoffice.common.constants import request_id_ctx


class AppError(HTTPException):
    """Base for domain errors; the class decides the status code."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "SERVER_ERROR"

    def __init__(self, detail: str):
        super().__init__(status_code=type(self).status_code, detail=detail)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class UpstreamError(AppError):
    """Email or media provider failed."""
    code = "UPSTREAM_ERROR"


_STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
}


async def fallback_handler(request: Request, exc: Exception):
    rid = request_id_ctx.get(None)

    logger.error(
        "unexpected.exception",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )

    payload = build_error(code="SERVER_ERROR", message="Internal Server Error", request_id=rid)
    return json_error(payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    rid = request_id_ctx.get(None)
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    logger.warning("request.validation_failed", extra={"errors": errors, "path": request.url.path})

    first = errors[0] if errors else None
    message = "Invalid request"
    if first:
        field = ".".join(str(p) for p in first["loc"] if p not in ("body", "query", "path", "form"))
        message = f"{field}: {first['msg']}" if field else str(first["msg"])

    payload = build_error(code="VALIDATION_ERROR", message=message, details=errors, request_id=rid)
    return json_error(payload, status_code=status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    rid = request_id_ctx.get(None)

    if isinstance(exc, AppError):
        code = exc.code
    else:
        code = _STATUS_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")

    if exc.status_code >= 500:
        logger.error("request.failed", extra={"path": request.url.path, "detail": exc.detail})

    payload = build_error(code=code, message=exc.detail, request_id=rid)
    return json_error(payload, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    rid = request_id_ctx.get(None)
    reason = str(getattr(exc, "orig", exc)).lower()

    if "foreign key" in reason:
        status_code, code, message = status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Referenced record does not exist"
    else:
        status_code, code, message = status.HTTP_409_CONFLICT, "CONFLICT", "Resource conflicts with an existing record"

    logger.warning("db.integrity_error", extra={"path": request.url.path, "reason": reason[:200]})
    return json_error(build_error(code=code, message=message, request_id=rid), status_code=status_code)


async def no_result_handler(request: Request, exc: NoResultFound):
    rid = request_id_ctx.get(None)
    payload = build_error(code="NOT_FOUND", message="Resource not found", request_id=rid)
    return json_error(payload, status_code=status.HTTP_404_NOT_FOUND)


def register_all_exceptions(app: FastAPI):

    app.add_exception_handler(Exception, fallback_handler)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # starlette's base class so routing 404/405 share the envelope
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(IntegrityError, integrity_error_handler)

    app.add_exception_handler(NoResultFound, no_result_handler)
