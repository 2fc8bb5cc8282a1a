import io
import re

from PIL import Image

url_prefix = "/api"

CODE_RE = re.compile(r"<strong>(\d{6})</strong>")
STRONG_PASSWORD = "S3cure-pass"


def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def data_of(resp) -> dict:
    body = resp.json()
    assert body["status"] == "ok", body
    return body["data"]


def error_of(resp) -> dict:
    body = resp.json()
    assert body["status"] == "error", body
    return body["error"]


async def make_warehouse(ac_client, headers, store_id, name="Ikeja Main"):
    resp = await ac_client.post(f"{url_prefix}/warehouses/{store_id}", headers=headers, json={"name": name})
    return data_of(resp)["warehouse"]["id"]


async def make_plain_product(ac_client, headers, store_id, name, categories=()):
    resp = await ac_client.post(f"{url_prefix}/products/{store_id}", headers=headers,
                                json={"name": name, "categories": list(categories)})
    return data_of(resp)["product"]["id"]


async def adjust_stock(ac_client, headers, store_id, warehouse_id, product_id, quantity, kind, **fields):
    return await ac_client.post(f"{url_prefix}/stock-adjustments/{store_id}", headers=headers, json={
        "warehouseId": warehouse_id, "productId": product_id, "quantity": quantity, "type": kind, **fields})
