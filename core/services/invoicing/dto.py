"""
Data Transfer Objects for invoice rendering.

These are the read-only inputs of the rendering engine. The providers in
``providers.py`` map persisted rows onto them; the sample data generator
builds them directly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class InvoiceType:
    STANDARD = 'standard'
    SIMPLIFIED = 'simplified'


@dataclass(frozen=True)
class Branch:
    """
    Canonical seller identity for a branch.

    Rendering always reads seller data from here; templates never store a
    copy of it.
    """

    name_en: str
    name_ar: str = ''
    vat_number: str = ''
    crn: str = ''
    address: str = ''
    phone: str = ''
    email: str = ''
    logo_url: str = ''

    @property
    def legal_name(self) -> str:
        return self.name_ar or self.name_en


@dataclass(frozen=True)
class Customer:
    name: str = ''
    vat_number: str = ''
    phone: str = ''
    email: str = ''


@dataclass(frozen=True)
class LineItem:
    """One sold line. Blank or whitespace-only notes count as no notes."""

    product_name: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal
    notes: Optional[str] = None
    barcode: str = ''
    unit: str = ''
    discount: Decimal = Decimal('0')
    vat_amount: Decimal = Decimal('0')

    @property
    def has_notes(self) -> bool:
        return bool(self.notes and self.notes.strip())


@dataclass(frozen=True)
class Sale:
    """A sale as consumed by the renderer."""

    invoice_number: str
    sale_date: datetime
    subtotal: Decimal
    total_discount: Decimal
    tax_amount: Decimal
    total: Decimal
    currency: str = 'SAR'
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    transaction_id: str = ''
    order_number: str = ''
    invoice_type: str = InvoiceType.STANDARD
    cashier_name: str = ''
    payment_method: str = ''
    customer: Optional[Customer] = None
    amount_paid: Optional[Decimal] = None
    change_returned: Optional[Decimal] = None
    is_sample: bool = False

    @property
    def is_simplified(self) -> bool:
        return self.invoice_type == InvoiceType.SIMPLIFIED

    @property
    def total_excl_vat(self) -> Decimal:
        """Subtotal net of discount; derived on demand, never stored."""
        return self.subtotal - self.total_discount
