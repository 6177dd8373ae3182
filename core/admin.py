from django.contrib import admin, messages
from django.db import transaction
from .models import Branch, InvoiceTemplate, Sale, SaleLineItem
from core.services.invoicing.exceptions import InvoicingError
from core.services.invoicing.store import TemplateStore


# Inline Admin Classes
class SaleLineItemInline(admin.TabularInline):
    model = SaleLineItem
    extra = 0
    fields = ['position', 'product_name', 'barcode', 'unit', 'quantity', 'unit_price',
              'discount', 'vat_amount', 'line_total', 'notes']


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ['code', 'name_en', 'name_ar', 'tax_number', 'phone']
    search_fields = ['code', 'name_en', 'name_ar', 'tax_number']

    fieldsets = (
        (None, {'fields': ('code', 'name_en', 'name_ar')}),
        ('Registration', {'fields': ('tax_number', 'crn')}),
        ('Contact', {'fields': ('address', 'phone', 'email', 'logo_path')}),
    )


@admin.register(InvoiceTemplate)
class InvoiceTemplateAdmin(admin.ModelAdmin):
    list_display = ['name', 'branch', 'paper_size', 'is_active', 'updated_at']
    list_filter = ['branch', 'paper_size', 'is_active']
    search_fields = ['name', 'description']
    # Activation goes through the store so the swap stays exclusive
    readonly_fields = ['is_active', 'created_at', 'updated_at', 'created_by']
    actions = ['activate_template']

    fieldsets = (
        (None, {'fields': ('branch', 'name', 'description')}),
        ('Paper', {'fields': ('paper_size', 'custom_width', 'custom_height')}),
        ('Layout', {'fields': ('schema',)}),
        ('Metadata', {'fields': ('is_active', 'created_by', 'created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        # The active template stays until another one is activated
        if obj is not None and obj.is_active:
            return False
        return super().has_delete_permission(request, obj)

    def delete_queryset(self, request, queryset):
        # The bulk delete would bypass the active-template check
        active = [t.name for t in queryset if t.is_active]
        if active:
            self.message_user(
                request,
                f"Nothing deleted. Active templates cannot be deleted: {', '.join(active)}.",
                level=messages.ERROR
            )
            return

        with transaction.atomic():
            for template in queryset:
                template.delete()

    def activate_template(self, request, queryset):
        """
        Admin action to make the selected template its branch's active one.
        """
        if queryset.count() != 1:
            self.message_user(
                request,
                "Select exactly one template to activate.",
                level=messages.ERROR
            )
            return

        template = queryset.first()
        try:
            TemplateStore(template.branch).set_active(template.id)
        except InvoicingError as e:
            self.message_user(request, f"Failed to activate '{template.name}': {e}", level=messages.ERROR)
            return

        self.message_user(
            request,
            f"'{template.name}' is now the active template for {template.branch}.",
            level=messages.SUCCESS
        )
    activate_template.short_description = "Set as active template"


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['invoice_number', 'branch', 'sale_date', 'invoice_type', 'payment_method', 'total']
    list_filter = ['branch', 'invoice_type', 'payment_method']
    search_fields = ['invoice_number', 'transaction_id', 'order_number', 'customer_name']
    date_hierarchy = 'sale_date'
    inlines = [SaleLineItemInline]

    fieldsets = (
        (None, {'fields': ('branch', 'invoice_number', 'invoice_type', 'sale_date')}),
        ('References', {'fields': ('transaction_id', 'order_number', 'cashier_name')}),
        ('Customer', {'fields': ('customer_name', 'customer_vat_number', 'customer_phone', 'customer_email')}),
        ('Totals', {'fields': ('subtotal', 'total_discount', 'tax_amount', 'total', 'currency')}),
        ('Payment', {'fields': ('payment_method', 'amount_paid', 'change_returned')}),
    )
