"""
Core Printing Framework

Converts composed invoice HTML to PDF using WeasyPrint, and sanitizes
free-text markup printed on invoices.
"""

from .service import PdfRenderService
from .dto import PdfResult
from .interfaces import IPdfRenderer

__all__ = [
    'PdfRenderService',
    'PdfResult',
    'IPdfRenderer',
]
