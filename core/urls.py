from django.urls import path
from . import views_invoicing

urlpatterns = [
    # Invoice templates
    path('invoice-templates/', views_invoicing.invoice_templates, name='invoice-templates'),
    path('invoice-templates/active/', views_invoicing.invoice_template_active, name='invoice-template-active'),
    path('invoice-templates/preview/', views_invoicing.invoice_template_preview_schema, name='invoice-template-preview-schema'),
    path('invoice-templates/<int:template_id>/', views_invoicing.invoice_template_detail, name='invoice-template-detail'),
    path('invoice-templates/<int:template_id>/activate/', views_invoicing.invoice_template_activate, name='invoice-template-activate'),
    path('invoice-templates/<int:template_id>/duplicate/', views_invoicing.invoice_template_duplicate, name='invoice-template-duplicate'),
    path('invoice-templates/<int:template_id>/preview/', views_invoicing.invoice_template_preview, name='invoice-template-preview'),

    # Sale invoices
    path('sales/<int:sale_id>/invoice/', views_invoicing.sale_invoice, name='sale-invoice'),
    path('sales/<int:sale_id>/invoice.pdf', views_invoicing.sale_invoice_pdf, name='sale-invoice-pdf'),
    path('sales/<int:sale_id>/compliance-qr/', views_invoicing.sale_compliance_qr, name='sale-compliance-qr'),
]
