"""
Interfaces for the Printing Framework
"""

from abc import ABC, abstractmethod


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.

    Implementations turn a complete HTML document into PDF bytes. Page size
    and margins come from the document's own ``@page`` rules.
    """

    @abstractmethod
    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        """
        Args:
            html: Complete HTML document
            base_url: Base URL for resolving relative URLs (logos, etc.)

        Returns:
            PDF content as bytes
        """
        pass
