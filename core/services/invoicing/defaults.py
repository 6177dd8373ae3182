"""
Default invoice template schemas.

Used by the ``seed_invoice_templates`` command and as the starting point
for new templates.
"""

import copy

from core.models import PaperSize


def _header(show_address: bool, show_crn: bool) -> dict:
    return {
        'id': 'header',
        'type': 'header',
        'order': 1,
        'visible': True,
        'config': {
            'showLogo': True,
            'showBranchName': True,
            'showAddress': show_address,
            'addressLabel': 'Address',
            'showPhone': True,
            'phoneLabel': 'Phone',
            'showVatNumber': True,
            'vatNumberLabel': 'VAT Number',
            'showCRN': show_crn,
            'crnLabel': 'CR Number',
            'alignment': 'center',
        },
    }


def _columns(widths: dict) -> list:
    labels = {'name': 'Item', 'quantity': 'Qty', 'price': 'Price', 'total': 'Total'}
    return [
        {'key': key, 'label': labels[key], 'visible': width != '0%', 'width': width}
        for key, width in widths.items()
    ]


def _styling(header: str, title: str, body: str, footer: str, gap: str, line_height: str, padding: str) -> dict:
    return {
        'fontFamily': 'Arial, sans-serif',
        'fontSize': {'header': header, 'title': title, 'body': body, 'footer': footer},
        'spacing': {'sectionGap': gap, 'lineHeight': line_height, 'padding': padding},
    }


def _schema(paper_size, *, header, customer_visible, customer_fields, columns, summary_fields, styling) -> dict:
    return {
        'version': '1.0',
        'paperSize': str(paper_size),
        'rtl': False,
        'priceIncludesVat': True,
        'sections': [
            header,
            {
                'id': 'invoice-title',
                'type': 'title',
                'order': 2,
                'visible': True,
                'config': {
                    'dynamicTitle': True,
                    'standardTitle': 'Standard Tax Invoice',
                    'simplifiedTitle': 'Simplified Tax Invoice',
                },
            },
            {
                'id': 'customer-info',
                'type': 'customer',
                'order': 3,
                'visible': customer_visible,
                'config': {'fields': customer_fields},
            },
            {
                'id': 'invoice-meta',
                'type': 'metadata',
                'order': 4,
                'visible': True,
                'config': {
                    'fields': [
                        {'key': 'invoiceNumber', 'label': 'Invoice #', 'visible': True},
                        {'key': 'date', 'label': 'Date', 'visible': True},
                        {'key': 'cashier', 'label': 'Cashier', 'visible': True},
                        {'key': 'priceVATLabel', 'label': 'Prices include VAT', 'visible': True},
                    ],
                },
            },
            {
                'id': 'items-table',
                'type': 'items',
                'order': 5,
                'visible': True,
                'config': {'columns': columns, 'notesLabel': 'Note'},
            },
            {
                'id': 'summary',
                'type': 'summary',
                'order': 6,
                'visible': True,
                'config': {'fields': summary_fields},
            },
            {
                'id': 'footer',
                'type': 'footer',
                'order': 7,
                'visible': True,
                'config': {
                    'showBarcode': False,
                    'barcodeLabel': 'Invoice Number',
                    'showZatcaQR': True,
                    'zatcaQRLabel': 'Scan for e-Invoice',
                    'showPaymentMethod': False,
                    'paymentMethodLabel': 'Payment Method',
                    'showNotes': True,
                    'notesLabel': 'Notes',
                    'notesText': 'Thank you for your business!',
                    'showPoweredBy': False,
                    'poweredByText': '',
                },
            },
        ],
        'styling': styling,
    }


_SUMMARY_FIELDS = [
    {'key': 'subtotal', 'label': 'Subtotal', 'visible': True},
    {'key': 'discount', 'label': 'Discount', 'visible': True},
    {'key': 'totalExclVat', 'label': 'Total excl. VAT', 'visible': True},
    {'key': 'vatAmount', 'label': 'VAT (15%)', 'visible': True},
    {'key': 'total', 'label': 'Total', 'visible': True, 'highlight': True},
]

DEFAULT_SCHEMAS = {
    PaperSize.THERMAL_58: _schema(
        PaperSize.THERMAL_58,
        header=_header(show_address=False, show_crn=False),
        customer_visible=False,
        customer_fields=[
            {'key': 'name', 'label': 'Customer Name', 'visible': True},
            {'key': 'vatNumber', 'label': 'VAT Number', 'visible': False},
            {'key': 'phone', 'label': 'Phone', 'visible': False},
        ],
        columns=_columns({'name': '60%', 'quantity': '15%', 'price': '0%', 'total': '25%'}),
        summary_fields=_SUMMARY_FIELDS,
        styling=_styling('12px', '14px', '10px', '9px', '12px', '1.4', '8px'),
    ),
    PaperSize.THERMAL_80: _schema(
        PaperSize.THERMAL_80,
        header=_header(show_address=True, show_crn=True),
        customer_visible=True,
        customer_fields=[
            {'key': 'name', 'label': 'Customer Name', 'visible': True},
            {'key': 'vatNumber', 'label': 'VAT Number', 'visible': True},
            {'key': 'phone', 'label': 'Phone', 'visible': True},
        ],
        columns=_columns({'name': '40%', 'quantity': '15%', 'price': '20%', 'total': '25%'}),
        summary_fields=_SUMMARY_FIELDS,
        styling=_styling('14px', '16px', '12px', '10px', '15px', '1.5', '10px'),
    ),
    PaperSize.A4: _schema(
        PaperSize.A4,
        header=_header(show_address=True, show_crn=True),
        customer_visible=True,
        customer_fields=[
            {'key': 'name', 'label': 'Customer Name', 'visible': True},
            {'key': 'vatNumber', 'label': 'VAT Number', 'visible': True},
            {'key': 'phone', 'label': 'Phone', 'visible': True},
            {'key': 'email', 'label': 'Email', 'visible': True},
        ],
        columns=_columns({'name': '45%', 'quantity': '15%', 'price': '20%', 'total': '20%'}),
        summary_fields=_SUMMARY_FIELDS,
        styling=_styling('18px', '22px', '13px', '11px', '20px', '1.6', '20px'),
    ),
}

DEFAULT_INVOICE_SCHEMA = DEFAULT_SCHEMAS[PaperSize.THERMAL_80]

# (name, description, paper size, active)
DEFAULT_TEMPLATES = [
    ('Default 58mm Thermal Receipt', 'Compact thermal receipt template for 58mm printers', PaperSize.THERMAL_58, False),
    ('Default 80mm Thermal Receipt', 'Standard thermal receipt template for 80mm printers', PaperSize.THERMAL_80, True),
    ('Default A4 Invoice', 'Full page tax invoice template for A4 paper', PaperSize.A4, False),
]


def default_schema(paper_size=PaperSize.THERMAL_80) -> dict:
    """Fresh copy of the default schema for a paper size."""
    return copy.deepcopy(DEFAULT_SCHEMAS[PaperSize(paper_size)])
