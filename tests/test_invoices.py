import pytest

from backoffice.invoices.calculations import invoice_totals, line_amounts, settle
from backoffice.schema.full_schema import InvoiceStatus
from helpers import data_of, error_of, url_prefix

ITEMS = [
    {"description": "Tote", "quantity": 2, "unitPrice": 100, "taxRate": 10},
    {"description": "Delivery", "quantity": 1, "unitPrice": 50},
]


def test_line_and_invoice_totals():
    lines = [line_amounts(2, 100, 10), line_amounts(1, 50, 0)]
    assert lines == [(200.0, 20.0), (50.0, 0.0)]
    assert invoice_totals(lines, 20) == (250.0, 20.0)
    assert invoice_totals(lines, 1000) == (0.0, 20.0)


def test_settle_rules():
    assert settle(250, 0, InvoiceStatus.PENDING) == (0, 250, InvoiceStatus.PENDING)
    assert settle(250, 0, InvoiceStatus.PAID) == (250, 0, InvoiceStatus.PAID)
    assert settle(250, 100, InvoiceStatus.PENDING, paid_given=True) == (100, 150, InvoiceStatus.PARTIALLY_PAID)
    assert settle(250, 400, InvoiceStatus.PENDING, paid_given=True) == (250, 0, InvoiceStatus.PAID)
    assert settle(250, 0, InvoiceStatus.PAID, paid_given=True) == (0, 250, InvoiceStatus.PENDING)
    assert settle(300, 250, InvoiceStatus.PAID) == (300, 0, InvoiceStatus.PAID)
    assert settle(300, 250, InvoiceStatus.PARTIALLY_PAID) == (250, 50, InvoiceStatus.PARTIALLY_PAID)


async def make_customer(ac_client, headers, store_id, first_name="Chidi"):
    resp = await ac_client.post(f"{url_prefix}/customers/{store_id}", headers=headers,
                                json={"firstName": first_name, "lastName": "Eze"})
    return data_of(resp)["customer"]["id"]


@pytest.mark.asyncio
async def test_create_invoice_computes_totals(ac_client, owner):
    headers, store_id = owner
    customer_id = await make_customer(ac_client, headers, store_id)

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_id}", headers=headers, json={
        "invoiceNumber": "INV-001", "customerId": customer_id, "discountAmount": 20, "items": ITEMS})
    assert resp.status_code == 201
    invoice = data_of(resp)["invoice"]
    assert invoice["totalAmount"] == 250
    assert invoice["taxAmount"] == 20
    assert invoice["dueAmount"] == 250
    assert invoice["paidAmount"] == 0
    assert invoice["status"] == "PENDING"
    assert invoice["createdBy"] == "Ada Obi"
    assert [i["totalPrice"] for i in invoice["items"]] == [200, 50]

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_id}", headers=headers, json={
        "invoiceNumber": "INV-001", "items": ITEMS})
    assert resp.status_code == 409
    assert error_of(resp)["message"] == "Invoice number already exists"

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_id}", headers=headers, json={
        "invoiceNumber": "INV-002", "items": []})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_paid_status_and_partial_payments(ac_client, owner):
    headers, store_id = owner
    resp = await ac_client.post(f"{url_prefix}/invoices/{store_id}", headers=headers, json={
        "invoiceNumber": "INV-010", "status": "PAID", "items": ITEMS})
    invoice = data_of(resp)["invoice"]
    assert invoice["paidAmount"] == invoice["totalAmount"] == 270
    assert invoice["dueAmount"] == 0

    url = f"{url_prefix}/invoices/{store_id}/{invoice['id']}"
    resp = await ac_client.put(url, headers=headers, json={"paidAmount": 100})
    invoice = data_of(resp)["invoice"]
    assert invoice["status"] == "PARTIALLY_PAID"
    assert invoice["dueAmount"] == 170

    resp = await ac_client.put(url, headers=headers, json={
        "items": [{"description": "Tote", "quantity": 1, "unitPrice": 80}]})
    invoice = data_of(resp)["invoice"]
    assert invoice["totalAmount"] == 80
    assert invoice["paidAmount"] == 80
    assert invoice["status"] == "PAID"
    assert len(invoice["items"]) == 1

    resp = await ac_client.put(url, headers=headers, json={"totalAmount": 1})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_invoice_references_must_belong_to_store(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")
    foreign_customer = await make_customer(ac_client, headers_b, store_b)

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_a}", headers=headers_a, json={
        "invoiceNumber": "INV-1", "customerId": foreign_customer, "items": ITEMS})
    assert resp.status_code == 400

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_a}", headers=headers_a, json={
        "invoiceNumber": "INV-1", "items": [{"productId": 77, "quantity": 1, "unitPrice": 5}]})
    assert resp.status_code == 400

    resp = await ac_client.post(f"{url_prefix}/invoices/{store_b}", headers=headers_b, json={
        "invoiceNumber": "INV-1", "items": ITEMS})
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_invoice_filters_and_export(ac_client, owner):
    headers, store_id = owner
    chidi = await make_customer(ac_client, headers, store_id, "Chidi")
    base = f"{url_prefix}/invoices/{store_id}"
    await ac_client.post(base, headers=headers, json={"invoiceNumber": "A-1", "customerId": chidi, "items": ITEMS})
    await ac_client.post(base, headers=headers, json={
        "invoiceNumber": "B-1", "billerName": "Kemi", "status": "PAID",
        "items": [{"quantity": 1, "unitPrice": 10}]})

    resp = await ac_client.get(base, headers=headers, params={"search": "chidi"})
    assert [i["invoiceNumber"] for i in data_of(resp)["items"]] == ["A-1"]

    resp = await ac_client.get(base, headers=headers, params={"status": "PAID"})
    assert [i["invoiceNumber"] for i in data_of(resp)["items"]] == ["B-1"]

    resp = await ac_client.get(base, headers=headers, params={"minAmount": 100})
    assert [i["invoiceNumber"] for i in data_of(resp)["items"]] == ["A-1"]

    resp = await ac_client.get(base, headers=headers, params={"customerId": chidi, "maxAmount": 100})
    assert data_of(resp)["items"] == []

    resp = await ac_client.get(f"{base}/all", headers=headers)
    assert len(data_of(resp)["items"]) == 2

    resp = await ac_client.get(f"{base}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert len(lines) == 3
    assert "Chidi Eze" in resp.text

    invoice_id = data_of(await ac_client.get(f"{base}/all", headers=headers))["items"][0]["id"]
    resp = await ac_client.delete(f"{base}/{invoice_id}", headers=headers)
    assert resp.status_code == 200
    resp = await ac_client.get(f"{base}/{invoice_id}", headers=headers)
    assert resp.status_code == 404
