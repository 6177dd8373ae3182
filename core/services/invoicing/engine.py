"""
Invoice Rendering Engine

Central entry point for rendering invoices and template previews.
"""

import logging
from typing import Optional, Union

from . import compliance
from .dto import Branch, Sale
from .exceptions import EncodingError
from .layout import compose_document
from .sample import sample_branch, sample_sale
from .schema import InvoiceSchema, parse_schema
from .sections.base import RenderContext


logger = logging.getLogger(__name__)

SchemaInput = Union[InvoiceSchema, dict, str]


class InvoiceRenderingEngine:
    """
    Orchestrates schema validation, compliance QR generation and layout.

    Responsibilities:
    1. Validate the schema completely before producing any markup
    2. Build the compliance QR payload (supplementary: a failure there does
       not stop the invoice text from rendering)
    3. Compose the document through the section renderers

    The engine holds no state and performs no I/O, so one instance can be
    shared between threads.

    Usage:
        engine = InvoiceRenderingEngine()
        html = engine.render_invoice(template.schema, sale, branch)
    """

    def render_invoice(self, schema: SchemaInput, sale: Sale, branch: Branch) -> str:
        """
        Render an invoice for a real sale.

        Args:
            schema: InvoiceSchema, or the persisted schema dict / JSON string
            sale: Sale to render
            branch: Canonical seller branch

        Returns:
            HTML document

        Raises:
            ValidationError: If the schema is malformed
        """
        schema = self._ensure_schema(schema)

        context = RenderContext(
            schema=schema,
            sale=sale,
            branch=branch,
            qr_image=self._qr_image(sale, branch),
        )
        html = compose_document(schema, context, title=f"Invoice {sale.invoice_number}")
        logger.info(f"Rendered invoice {sale.invoice_number} ({len(html)} chars)")
        return html

    def render_preview(self, schema: SchemaInput, branch: Optional[Branch] = None) -> str:
        """
        Render a template preview with the deterministic sample sale.

        Args:
            schema: InvoiceSchema, or the persisted schema dict / JSON string
            branch: Branch to show in the header; defaults to a sample branch
        """
        schema = self._ensure_schema(schema)
        branch = branch or sample_branch()
        sale = sample_sale()

        context = RenderContext(
            schema=schema,
            sale=sale,
            branch=branch,
            qr_image=self._qr_image(sale, branch),
        )
        return compose_document(schema, context, title="Invoice Preview")

    def generate_compliance_qr(self, sale: Sale, branch: Branch) -> str:
        """
        Generate the Base64 compliance QR payload.

        Raises:
            EncodingError: If a field exceeds the TLV length limit or the
                branch has no VAT number
        """
        return compliance.generate_compliance_qr(sale, branch)

    def _ensure_schema(self, schema: SchemaInput) -> InvoiceSchema:
        if isinstance(schema, InvoiceSchema):
            return schema
        return parse_schema(schema)

    def _qr_image(self, sale: Sale, branch: Branch) -> Optional[str]:
        # The QR is supplementary: a field that cannot be encoded drops the QR, not the invoice
        try:
            return compliance.render_qr_image(self.generate_compliance_qr(sale, branch))
        except EncodingError as e:
            logger.warning(f"Compliance QR skipped for invoice {sale.invoice_number}: {e}")
            return None
