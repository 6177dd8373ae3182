"""
Invoice content hash.

The hash covers a canonical one-line representation of the invoice:
invoice number, UTC timestamp and grand total, joined by ``|``.
"""

import hashlib

from .dto import Sale
from .formatting import format_amount, to_utc


def canonical_invoice_representation(sale: Sale) -> str:
    return "|".join([
        sale.invoice_number,
        to_utc(sale.sale_date).isoformat(),
        format_amount(sale.total),
    ])


def invoice_hash(sale: Sale) -> bytes:
    """Return the raw 32-byte SHA-256 digest of the canonical representation."""
    return hashlib.sha256(canonical_invoice_representation(sale).encode('utf-8')).digest()
