from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.utils.translation import gettext_lazy as _


# Enums as TextChoices
class PaperSize(models.TextChoices):
    THERMAL_58 = 'Thermal58mm', _('58mm Thermal')
    THERMAL_80 = 'Thermal80mm', _('80mm Thermal')
    A4 = 'A4', _('A4 Paper')
    CUSTOM = 'Custom', _('Custom Size')


class InvoiceType(models.TextChoices):
    STANDARD = 'standard', _('Standard Tax Invoice')
    SIMPLIFIED = 'simplified', _('Simplified Tax Invoice')


class PaymentMethod(models.TextChoices):
    CASH = 'Cash', _('Cash')
    CARD = 'Card', _('Card')
    DIGITAL_WALLET = 'DigitalWallet', _('Digital Wallet')
    BANK_TRANSFER = 'BankTransfer', _('Bank Transfer')
    MULTIPLE = 'Multiple', _('Multiple')


class Branch(models.Model):
    """
    A selling branch. The single canonical source of seller identity
    (legal name, VAT number, address, contacts) printed on invoices.
    """
    code = models.CharField(max_length=20, unique=True)
    name_en = models.CharField(max_length=200)
    name_ar = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=500, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    crn = models.CharField(
        max_length=50,
        blank=True,
        help_text="Commercial registration number"
    )
    tax_number = models.CharField(
        max_length=50,
        blank=True,
        help_text="VAT registration number"
    )
    logo_path = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['code']
        verbose_name_plural = 'Branches'

    def __str__(self):
        return f"{self.code} - {self.name_en}"


class InvoiceTemplate(models.Model):
    """
    Invoice layout template. The schema describes which sections are
    printed, in which order and with which options.

    At most one template per branch is active; activation goes through
    TemplateStore.set_active, which swaps the flag atomically.
    """
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name='invoice_templates')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    paper_size = models.CharField(
        max_length=20,
        choices=PaperSize.choices,
        default=PaperSize.THERMAL_80
    )
    custom_width = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Width in mm (custom paper size only)"
    )
    custom_height = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Height in mm (custom paper size only)"
    )
    schema = models.JSONField(default=dict)
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoice_templates'
    )

    class Meta:
        ordering = ['-is_active', '-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['branch'],
                condition=models.Q(is_active=True),
                name='unique_active_invoice_template_per_branch'
            ),
        ]
        indexes = [
            models.Index(fields=['branch', 'is_active'], name='invoicetpl_branch_active_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({'active' if self.is_active else 'inactive'})"

    def clean(self):
        if self.paper_size == PaperSize.CUSTOM:
            if not self.custom_width or not self.custom_height:
                raise ValidationError(_('Custom dimensions are required for custom paper size.'))
        elif self.custom_width or self.custom_height:
            raise ValidationError(_('Custom dimensions are only allowed for custom paper size.'))

        # Import here to avoid circular imports
        from core.services.invoicing.exceptions import InvoicingError
        from core.services.invoicing.schema import parse_schema

        try:
            parse_schema(
                self.schema,
                paper_size=self.paper_size,
                custom_width=self.custom_width,
                custom_height=self.custom_height,
            )
        except InvoicingError as e:
            raise ValidationError({'schema': str(e)})

    def delete(self, *args, **kwargs):
        # Import here to avoid circular imports
        from core.services.invoicing.exceptions import ActiveTemplateProtectedError

        if self.is_active:
            raise ActiveTemplateProtectedError(
                "Cannot delete the active template. Please set another template as active first."
            )
        return super().delete(*args, **kwargs)


class Sale(models.Model):
    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, related_name='sales')
    invoice_number = models.CharField(max_length=50, unique=True)
    transaction_id = models.CharField(max_length=50, blank=True)
    order_number = models.CharField(max_length=50, blank=True)
    invoice_type = models.CharField(
        max_length=20,
        choices=InvoiceType.choices,
        default=InvoiceType.SIMPLIFIED
    )
    sale_date = models.DateTimeField()
    cashier_name = models.CharField(max_length=150, blank=True)
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    total_discount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    amount_paid = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    change_returned = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default='SAR')
    customer_name = models.CharField(max_length=200, blank=True)
    customer_vat_number = models.CharField(max_length=50, blank=True)
    customer_phone = models.CharField(max_length=50, blank=True)
    customer_email = models.EmailField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-sale_date']

    def __str__(self):
        return self.invoice_number


class SaleLineItem(models.Model):
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='line_items')
    position = models.PositiveIntegerField(default=0)
    product_name = models.CharField(max_length=200)
    barcode = models.CharField(max_length=100, blank=True)
    unit = models.CharField(max_length=50, blank=True)
    quantity = models.DecimalField(max_digits=10, decimal_places=3)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    vat_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    line_total = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.product_name} x {self.quantity}"
