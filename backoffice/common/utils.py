import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from backoffice.common.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, request_id_ctx


def now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def build_success(data: Any, request_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "status": "ok",
        "data": data,
        "error": None,
        "request_id": request_id,
    }


def build_error(code: Union[str, int] = "UNKNOWN_ERROR",
                message: Optional[str] = None,
                details: Optional[Any] = None,
                request_id: Optional[str] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {
        "status": "error",
        "data": None,
        "error": error,
        "request_id": request_id,
    }


def json_ok(content: Dict[str, Any], status_code: int = 200, headers=None) -> JSONResponse:
    return JSONResponse(jsonable_encoder(content), status_code=status_code, headers=headers)


def json_error(content: Dict[str, Any], status_code: int = 500, headers=None) -> JSONResponse:
    return JSONResponse(jsonable_encoder(content), status_code=status_code, headers=headers)


def success_response(data: Any, status_code: int = 200,
                     headers: Optional[Dict[str, Any]] = None) -> JSONResponse:
    content = build_success(data, request_id=request_id_ctx.get())
    return json_ok(content, status_code=status_code, headers=headers)


def clamp_page(page: int, page_size: Optional[int]) -> tuple[int, int]:
    page = max(1, page or 1)
    size = page_size or DEFAULT_PAGE_SIZE
    return page, max(1, min(size, MAX_PAGE_SIZE))


def page_meta(total: int, page: int, page_size: int) -> Dict[str, int]:
    return {
        "totalCount": total,
        "page": page,
        "pageSize": page_size,
        "totalPages": math.ceil(total / page_size) if page_size else 0,
    }


def paginated(items, total: int, page: int, page_size: int) -> Dict[str, Any]:
    return {"items": items, "meta": page_meta(total, page, page_size)}
