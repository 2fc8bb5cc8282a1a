"""Invoice money arithmetic. Amounts are rounded to cents at every step."""
from typing import Iterable, List, Tuple

from backoffice.schema.full_schema import InvoiceStatus


def _cents(value: float) -> float:
    return round(value + 0.0, 2)


def line_amounts(quantity: int, unit_price: float, tax_rate: float) -> Tuple[float, float]:
    """Return (line total before tax, tax on the line)."""
    total = _cents(quantity * unit_price)
    return total, _cents(total * (tax_rate or 0) / 100)


def invoice_totals(lines: Iterable[Tuple[float, float]], discount: float) -> Tuple[float, float]:
    """Return (grand total, total tax); grand total = lines + tax - discount, never negative."""
    lines: List[Tuple[float, float]] = list(lines)
    subtotal = sum(total for total, _ in lines)
    tax = _cents(sum(tax for _, tax in lines))
    return max(_cents(subtotal + tax - (discount or 0)), 0.0), tax


def settle(total: float, paid: float, status: InvoiceStatus,
           paid_given: bool = False) -> Tuple[float, float, InvoiceStatus]:
    """Reconcile paid amount and status against the total; returns (paid, due, status).

    A PAID status without an explicit amount pays the invoice in full. An explicit
    amount, or an invoice already in a paid state, has its status derived from the money.
    """
    if status == InvoiceStatus.PAID and not paid_given:
        paid = total
    paid = _cents(min(max(paid or 0, 0), total))

    if paid_given or status in (InvoiceStatus.PAID, InvoiceStatus.PARTIALLY_PAID):
        if total > 0 and paid >= total:
            status = InvoiceStatus.PAID
        elif paid > 0:
            status = InvoiceStatus.PARTIALLY_PAID
        elif total > 0 and status in (InvoiceStatus.PAID, InvoiceStatus.PARTIALLY_PAID):
            status = InvoiceStatus.PENDING
    return paid, _cents(total - paid), status
