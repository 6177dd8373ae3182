"""
WeasyPrint Renderer Implementation

Adapter for rendering invoice HTML to PDF using WeasyPrint.
"""

from typing import Optional
import logging

from weasyprint import HTML, CSS

from .interfaces import IPdfRenderer


logger = logging.getLogger(__name__)


class WeasyPrintRenderer(IPdfRenderer):
    """
    PDF renderer using WeasyPrint engine.

    The invoice document carries its own ``@page`` size, so thermal rolls,
    A4 and custom sizes all come out at the right physical dimensions.
    """

    def __init__(self, stylesheets: Optional[list] = None):
        """
        Args:
            stylesheets: Optional list of extra CSS file paths to apply
        """
        self.stylesheets = stylesheets or []

    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        html_doc = HTML(string=html, base_url=base_url or None)
        css_list = [CSS(filename=css) for css in self.stylesheets]
        pdf_bytes = html_doc.write_pdf(stylesheets=css_list)

        logger.debug(f"WeasyPrint produced {len(pdf_bytes)} bytes")
        return pdf_bytes
