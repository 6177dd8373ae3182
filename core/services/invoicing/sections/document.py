"""
Header, title and footer renderers.

These sections carry branch identity and closing content. Seller details
always come from the canonical branch record.
"""

from django.utils.html import format_html
from django.utils.safestring import mark_safe

from core.printing.sanitizer import sanitize_html

from ..schema import Section
from .base import RenderContext, join_html, wrap_section


ALIGNMENTS = ('left', 'center', 'right')


def render_header(section: Section, context: RenderContext):
    branch = context.branch
    parts = []

    if section.flag('showLogo') and branch.logo_url:
        parts.append(format_html('<img src="{}" alt="Logo" class="logo" />', branch.logo_url))

    if section.flag('showBranchName'):
        parts.append(format_html('<div class="branch-name">{}</div>', branch.name_en))
        if branch.name_ar:
            parts.append(format_html(
                '<div class="branch-name-ar" lang="ar">{}</div>', branch.name_ar
            ))

    if section.flag('showAddress') and branch.address:
        parts.append(format_html('<div class="branch-address">{}</div>', branch.address))

    labelled = [
        ('showPhone', 'phoneLabel', 'Phone', branch.phone),
        ('showVatNumber', 'vatNumberLabel', 'VAT', branch.vat_number),
        ('showCRN', 'crnLabel', 'CR', branch.crn),
    ]
    for flag, label_key, default_label, value in labelled:
        if section.flag(flag) and value:
            parts.append(format_html(
                '<div class="branch-detail">{}: {}</div>',
                section.option(label_key) or default_label,
                value,
            ))

    alignment = section.option('alignment', 'center')
    if alignment not in ALIGNMENTS:
        alignment = 'center'
    return wrap_section(section, join_html(parts), f"align-{alignment}")


def render_title(section: Section, context: RenderContext):
    if section.flag('dynamicTitle', True):
        if context.sale.is_simplified:
            title = section.option('simplifiedTitle') or 'Simplified Tax Invoice'
        else:
            title = section.option('standardTitle') or 'Standard Tax Invoice'
    else:
        title = section.option('title') or 'Invoice'
    return wrap_section(section, format_html('<div class="title">{}</div>', title))


def render_footer(section: Section, context: RenderContext):
    sale = context.sale
    parts = []

    if section.flag('showZatcaQR') and context.qr_image:
        parts.append(format_html(
            '<div class="qr-code"><div class="qr-label">{}</div>'
            '<img src="{}" alt="Compliance QR Code" class="qr-image" /></div>',
            section.option('zatcaQRLabel') or 'Scan for e-Invoice',
            context.qr_image,
        ))

    if section.flag('showBarcode') and sale.invoice_number:
        parts.append(format_html(
            '<div class="barcode"><span class="barcode-label">{}</span> '
            '<span class="barcode-value">{}</span></div>',
            section.option('barcodeLabel') or 'Invoice Number',
            sale.invoice_number,
        ))

    if section.flag('showPaymentMethod') and sale.payment_method:
        parts.append(format_html(
            '<div class="payment-method">{}: {}</div>',
            section.option('paymentMethodLabel') or 'Payment Method',
            sale.payment_method,
        ))

    notes_text = section.option('notesText')
    if section.flag('showNotes') and notes_text:
        # Notes are rich text from the template builder
        parts.append(format_html(
            '<div class="footer-notes">{}</div>',
            mark_safe(sanitize_html(notes_text, strict=True)),
        ))

    powered_by = section.option('poweredByText')
    if section.flag('showPoweredBy') and powered_by:
        parts.append(format_html('<div class="powered-by">{}</div>', powered_by))

    return wrap_section(section, join_html(parts))
