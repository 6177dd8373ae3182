"""
Invoice Rendering Service

Renders invoices from versioned template schemas and generates the
compliance QR payload.
"""

from .engine import InvoiceRenderingEngine
from .exceptions import (
    ActiveTemplateProtectedError,
    EncodingError,
    InvoicingError,
    NotFoundError,
    UnsupportedSectionError,
    ValidationError,
)
from .schema import InvoiceSchema, parse_schema

__all__ = [
    'InvoiceRenderingEngine',
    'InvoiceSchema',
    'parse_schema',
    'InvoicingError',
    'ValidationError',
    'UnsupportedSectionError',
    'EncodingError',
    'NotFoundError',
    'ActiveTemplateProtectedError',
]
