from typing import Optional
from fastapi import Query
from backoffice.common.constants import MAX_PAGE_SIZE
from backoffice.common.utils import clamp_page


class Pagination:
    """1-indexed page; page size from pageSize or limit."""

    def __init__(self, page: int = Query(1, ge=1),
                 page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
                 limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE)):
        self.page, self.page_size = clamp_page(page, page_size or limit)
