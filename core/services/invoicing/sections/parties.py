"""
Customer and invoice metadata renderers.
"""

from django.utils.html import format_html

from ..formatting import format_display_date
from ..schema import FieldDescriptor, Section
from .base import RenderContext, info_row, join_html, wrap_section


DEFAULT_CUSTOMER_FIELDS = (
    FieldDescriptor('name', 'Customer Name'),
    FieldDescriptor('vatNumber', 'VAT Number'),
    FieldDescriptor('phone', 'Phone'),
)

DEFAULT_METADATA_FIELDS = (
    FieldDescriptor('invoiceNumber', 'Invoice #'),
    FieldDescriptor('date', 'Date'),
    FieldDescriptor('cashier', 'Cashier'),
)


def _customer_value(key: str, context: RenderContext) -> str:
    customer = context.sale.customer
    if customer is None:
        return ''
    return {
        'name': customer.name,
        'vatNumber': customer.vat_number,
        'phone': customer.phone,
        'email': customer.email,
    }[key]


def _metadata_value(key: str, context: RenderContext) -> str:
    sale = context.sale
    if key == 'date':
        return format_display_date(sale.sale_date)
    return {
        'invoiceNumber': sale.invoice_number,
        'transactionId': sale.transaction_id,
        'orderNumber': sale.order_number,
        'cashier': sale.cashier_name,
        'paymentMethod': sale.payment_method,
    }[key]


def render_customer(section: Section, context: RenderContext):
    rows = []
    for descriptor in section.fields or DEFAULT_CUSTOMER_FIELDS:
        if not descriptor.visible:
            continue
        value = _customer_value(descriptor.key, context)
        if value:
            rows.append(info_row(descriptor.label, value))
    return wrap_section(section, join_html(rows))


def render_metadata(section: Section, context: RenderContext):
    rows = []
    for descriptor in section.fields or DEFAULT_METADATA_FIELDS:
        if not descriptor.visible:
            continue
        if descriptor.key == 'priceVATLabel':
            # A label-only line, meaningful only for VAT inclusive prices
            if context.schema.price_includes_vat:
                rows.append(format_html('<div class="price-vat-label">{}</div>', descriptor.label))
            continue
        value = _metadata_value(descriptor.key, context)
        if value:
            rows.append(info_row(descriptor.label, value))
    return wrap_section(section, join_html(rows))
