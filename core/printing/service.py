"""
Core PDF Render Service

Central service for converting invoice documents to PDF.
"""

from typing import Optional
import logging

from core.services.invoicing.config import get_setting

from .interfaces import IPdfRenderer
from .dto import PdfResult


logger = logging.getLogger(__name__)


class PdfRenderService:
    """
    Converts composed HTML documents to PDF.

    Responsibilities:
    1. Delegate PDF rendering to an IPdfRenderer implementation
    2. Return a structured PdfResult

    Usage:
        service = PdfRenderService()
        html = engine.render_invoice(schema, sale, branch)
        result = service.render(html, filename='INV-0001.pdf')
    """

    def __init__(self, renderer: Optional[IPdfRenderer] = None):
        """
        Args:
            renderer: PDF renderer implementation. If None, uses WeasyPrint.
        """
        self.renderer = renderer or self._get_default_renderer()

    def render(
        self,
        html: str,
        *,
        base_url: Optional[str] = None,
        filename: Optional[str] = None
    ) -> PdfResult:
        """
        Render an HTML document to PDF.

        Args:
            html: Complete HTML document
            base_url: Base URL for resolving assets; defaults to INVOICING['PDF_BASE_URL']
            filename: Optional filename for the PDF (defaults to 'document.pdf')

        Returns:
            PdfResult with PDF bytes and metadata
        """
        if base_url is None:
            base_url = get_setting('PDF_BASE_URL')

        try:
            logger.debug(f"Converting HTML to PDF with base_url: {base_url}")
            pdf_bytes = self.renderer.render_html_to_pdf(html, base_url)
        except Exception as e:
            logger.error(f"Failed to render PDF {filename or 'document.pdf'}: {e}", exc_info=True)
            raise

        result = PdfResult(
            pdf_bytes=pdf_bytes,
            filename=filename or 'document.pdf',
            content_type='application/pdf'
        )

        logger.info(
            f"Successfully generated PDF: {result.filename} "
            f"({len(result.pdf_bytes)} bytes)"
        )
        return result

    def _get_default_renderer(self) -> IPdfRenderer:
        # WeasyPrint needs native libraries; load it only when a PDF is produced
        from .weasyprint_renderer import WeasyPrintRenderer

        return WeasyPrintRenderer()
