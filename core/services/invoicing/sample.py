"""
Sample data for template previews.

The sample sale is fixed and deterministic so that previews of the same
schema are byte identical. It is flagged ``is_sample`` and never persisted.
It covers both branches of the items renderer: items with and without notes
(including whitespace-only notes), and carries a discount so the derived
"total excluding VAT" summary line can be previewed.
"""

from datetime import datetime, timezone
from decimal import Decimal

from .config import get_setting
from .dto import Branch, Customer, InvoiceType, LineItem, Sale


SAMPLE_SALE_DATE = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def sample_sale() -> Sale:
    return Sale(
        invoice_number='INV-SAMPLE-001',
        transaction_id='TXN-SAMPLE-001',
        order_number='ORD-SAMPLE-001',
        invoice_type=InvoiceType.STANDARD,
        sale_date=SAMPLE_SALE_DATE,
        cashier_name='Sample Cashier',
        payment_method='Cash',
        subtotal=Decimal('100.00'),
        total_discount=Decimal('5.00'),
        tax_amount=Decimal('14.25'),
        total=Decimal('109.25'),
        amount_paid=Decimal('110.00'),
        change_returned=Decimal('0.75'),
        currency=get_setting('DEFAULT_CURRENCY'),
        customer=Customer(
            name='Sample Customer',
            vat_number='300000000000003',
            phone='+966 50 123 4567',
            email='customer@example.com',
        ),
        line_items=(
            LineItem(
                product_name='Sample Product 1',
                quantity=Decimal('2'),
                unit_price=Decimal('30.00'),
                line_total=Decimal('60.00'),
                barcode='SAMPLE-001',
                unit='pcs',
                notes='Gift wrap, no price tag',
            ),
            LineItem(
                product_name='Sample Product 2',
                quantity=Decimal('1'),
                unit_price=Decimal('25.00'),
                line_total=Decimal('25.00'),
                barcode='SAMPLE-002',
                unit='pcs',
            ),
            LineItem(
                product_name='Sample Product 3',
                quantity=Decimal('3'),
                unit_price=Decimal('5.00'),
                line_total=Decimal('15.00'),
                barcode='SAMPLE-003',
                unit='pcs',
                notes='   ',
            ),
        ),
        is_sample=True,
    )


def sample_branch() -> Branch:
    return Branch(
        name_en='Sample Branch',
        name_ar='فرع نموذجي',
        vat_number='300000000000003',
        crn='1010000000',
        address='King Fahd Road, Riyadh',
        phone='+966 11 000 0000',
        email='branch@example.com',
    )
