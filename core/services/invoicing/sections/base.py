"""
Shared building blocks for section renderers.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from ..dto import Branch, Sale
from ..schema import InvoiceSchema, Section


@dataclass(frozen=True)
class RenderContext:
    """Everything a section renderer may read. Built once per document."""

    schema: InvoiceSchema
    sale: Sale
    branch: Branch
    qr_image: Optional[str] = None

    @property
    def currency(self) -> str:
        return self.sale.currency


def join_html(parts: Iterable[SafeString]) -> SafeString:
    """Concatenate already escaped fragments."""
    return mark_safe(''.join(parts))


def wrap_section(section: Section, body: SafeString, extra_class: str = '') -> SafeString:
    """
    Wrap a section body in its container div.

    Every visible section yields exactly one such container, even when the
    body is empty, so the document structure mirrors the schema.
    """
    css_class = f"section section-{section.kind.value}"
    if extra_class:
        css_class = f"{css_class} {extra_class}"
    return format_html(
        '<div class="{}" data-section-id="{}">{}</div>',
        css_class,
        section.id,
        body,
    )


def info_row(label: str, value: str) -> SafeString:
    return format_html(
        '<div class="info-row"><span class="info-label">{}:</span> <span class="info-value">{}</span></div>',
        label,
        value,
    )
