"""
Data Transfer Objects for the Printing Framework
"""

from dataclasses import dataclass


@dataclass
class PdfResult:
    """
    Rendered PDF document.

    Carries the bytes plus what an HTTP response needs to serve them.
    """

    pdf_bytes: bytes
    filename: str
    content_type: str = "application/pdf"

    def __len__(self) -> int:
        return len(self.pdf_bytes)

    @property
    def content_disposition(self) -> str:
        return f'inline; filename="{self.filename}"'
