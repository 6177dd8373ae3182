"""
Summary (totals) renderer.

Each summary field is described by a ``SummaryFieldSpec``: how to compute
its value from the sale and, optionally, a predicate deciding whether the
field applies to this sale at all. A configured field renders only when its
static ``visible`` flag is true AND its predicate (if any) holds.

Built-in fields:
- subtotal
- discount       (leading minus; only when discount > 0)
- totalExclVat   (subtotal - discount, derived; only when discount > 0)
- vatAmount
- total          (grand total, highlighted)
- paid / change  (only when the sale carries them)

Further fields can be added with ``register_summary_field``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from django.utils.html import format_html

from ..dto import Sale
from ..formatting import format_amount
from ..schema import FIELD_KEYS, FieldDescriptor, Section, SectionKind
from .base import RenderContext, join_html, wrap_section


@dataclass(frozen=True)
class SummaryFieldSpec:
    key: str
    value: Callable[[Sale], Decimal]
    predicate: Optional[Callable[[Sale], bool]] = None
    negative: bool = False
    highlight: bool = False

    def applies_to(self, sale: Sale) -> bool:
        return self.predicate is None or self.predicate(sale)


_fields: dict[str, SummaryFieldSpec] = {}


def register_summary_field(spec: SummaryFieldSpec) -> None:
    """Register a summary field and allow its key in template schemas"""
    if spec.key in _fields:
        raise ValueError(f"Summary field '{spec.key}' is already registered")
    _fields[spec.key] = spec
    FIELD_KEYS[SectionKind.SUMMARY].add(spec.key)


def get_summary_field(key: str) -> SummaryFieldSpec:
    return _fields[key]


def has_discount(sale: Sale) -> bool:
    return sale.total_discount > 0


register_summary_field(SummaryFieldSpec('subtotal', lambda s: s.subtotal))
register_summary_field(SummaryFieldSpec(
    'discount', lambda s: s.total_discount, predicate=has_discount, negative=True,
))
register_summary_field(SummaryFieldSpec(
    'totalExclVat', lambda s: s.total_excl_vat, predicate=has_discount,
))
register_summary_field(SummaryFieldSpec('vatAmount', lambda s: s.tax_amount))
register_summary_field(SummaryFieldSpec('total', lambda s: s.total, highlight=True))
register_summary_field(SummaryFieldSpec(
    'paid', lambda s: s.amount_paid, predicate=lambda s: s.amount_paid is not None,
))
register_summary_field(SummaryFieldSpec(
    'change', lambda s: s.change_returned, predicate=lambda s: s.change_returned is not None,
))


DEFAULT_SUMMARY_FIELDS = (
    FieldDescriptor('subtotal', 'Subtotal'),
    FieldDescriptor('discount', 'Discount'),
    FieldDescriptor('totalExclVat', 'Total excl. VAT'),
    FieldDescriptor('vatAmount', 'VAT (15%)'),
    FieldDescriptor('total', 'Total', highlight=True),
)


def _summary_row(descriptor: FieldDescriptor, spec: SummaryFieldSpec, context: RenderContext):
    amount = format_amount(spec.value(context.sale))
    if spec.negative:
        amount = f"-{amount}"
    css_class = 'summary-row total' if descriptor.highlight or spec.highlight else 'summary-row'
    return format_html(
        '<div class="{}" data-field="{}"><span class="summary-label">{}:</span> '
        '<span class="summary-value">{} {}</span></div>',
        css_class,
        descriptor.key,
        descriptor.label,
        amount,
        context.currency,
    )


def render_summary(section: Section, context: RenderContext):
    rows = []
    for descriptor in section.fields or DEFAULT_SUMMARY_FIELDS:
        spec = get_summary_field(descriptor.key)
        if descriptor.visible and spec.applies_to(context.sale):
            rows.append(_summary_row(descriptor, spec, context))
    return wrap_section(section, join_html(rows))
