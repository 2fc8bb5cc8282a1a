from datetime import datetime
from typing import List
from backoffice.common.models import CamelModel
from backoffice.warehouses.models import WarehouseRefOut


class StockProductOut(CamelModel):
    id: int
    name: str
    product_images: List[str] = []
    categories: List[str] = []


class StockOut(CamelModel):
    id: int
    store_id: int
    product_id: int
    warehouse_id: int
    quantity: int
    product: StockProductOut
    warehouse: WarehouseRefOut
    updated_at: datetime
