"""
Compliance QR payload generation.

Builds the e-invoice QR payload required on simplified and standard tax
invoices. Fields are TLV encoded in a fixed order and the resulting bytes
are Base64 encoded:

  Tag 1: Seller name
  Tag 2: VAT registration number
  Tag 3: Timestamp (ISO 8601, UTC)
  Tag 4: Invoice total (including VAT)
  Tag 5: VAT amount
  Tag 6: Invoice hash (raw SHA-256 digest)

The payload is built from an ordered list of ``ComplianceField``s, so signed
formats can append further tags (signature, public key, stamp) without
touching the encoder.
"""

import base64
import logging
from dataclasses import dataclass
from enum import IntEnum
from io import BytesIO
from typing import Sequence

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from . import tlv
from .config import get_setting
from .digest import invoice_hash
from .dto import Branch, Sale
from .exceptions import EncodingError
from .formatting import format_amount, format_timestamp


logger = logging.getLogger(__name__)


class ComplianceTag(IntEnum):
    SELLER_NAME = 1
    VAT_NUMBER = 2
    TIMESTAMP = 3
    TOTAL_WITH_VAT = 4
    VAT_AMOUNT = 5
    INVOICE_HASH = 6


@dataclass(frozen=True)
class ComplianceField:
    """A single tagged payload field, already converted to bytes."""

    tag: int
    value: bytes

    @classmethod
    def text(cls, tag: int, value: str) -> 'ComplianceField':
        return cls(int(tag), value.encode('utf-8'))


def build_compliance_fields(sale: Sale, branch: Branch) -> list[ComplianceField]:
    """
    Build the six phase-one fields, in tag order.

    Raises:
        EncodingError: If the branch has no VAT number
    """
    if not branch.vat_number.strip():
        raise EncodingError(f"Branch '{branch.name_en}' has no VAT number for the compliance QR")
    return [
        ComplianceField.text(ComplianceTag.SELLER_NAME, branch.legal_name),
        ComplianceField.text(ComplianceTag.VAT_NUMBER, branch.vat_number),
        ComplianceField.text(ComplianceTag.TIMESTAMP, format_timestamp(sale.sale_date)),
        ComplianceField.text(ComplianceTag.TOTAL_WITH_VAT, format_amount(sale.total)),
        ComplianceField.text(ComplianceTag.VAT_AMOUNT, format_amount(sale.tax_amount)),
        ComplianceField(int(ComplianceTag.INVOICE_HASH), invoice_hash(sale)),
    ]


def encode_payload(fields: Sequence[ComplianceField]) -> str:
    """
    TLV encode the fields in the given order and Base64 encode the result.

    Raises:
        EncodingError: If any field value exceeds 255 bytes
    """
    data = tlv.encode((f.tag, f.value) for f in fields)
    return base64.b64encode(data).decode('ascii')


def generate_compliance_qr(sale: Sale, branch: Branch) -> str:
    """
    Generate the Base64 compliance payload for a sale.

    Deterministic: the timestamp comes from the sale, nothing is random.

    Raises:
        EncodingError: If a field is too long for TLV encoding or the
            branch has no VAT number
    """
    payload = encode_payload(build_compliance_fields(sale, branch))
    logger.debug(f"Generated compliance payload for invoice {sale.invoice_number}")
    return payload


def decode_payload(payload: str) -> list[ComplianceField]:
    """Decode a Base64 payload back into its ordered fields."""
    return [ComplianceField(tag, value) for tag, value in tlv.decode(base64.b64decode(payload))]


def render_qr_image(payload: str) -> str:
    """
    Render the payload as a QR code PNG.

    Returns:
        ``data:image/png;base64,...`` URI suitable for an ``<img>`` src
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=get_setting('QR_BOX_SIZE'),
        border=get_setting('QR_BORDER'),
    )
    qr.add_data(payload)
    qr.make(fit=True)

    buffered = BytesIO()
    qr.make_image(fill_color="black", back_color="white").save(buffered, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffered.getvalue()).decode('ascii')
