import contextvars
from typing import Optional

# Context variable for the request id, set by RequestIdMiddleware
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

CSV_MEDIA_TYPE = "text/csv"
