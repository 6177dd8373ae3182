"""
Tests for TemplateStore and the sale and branch providers.
"""

from datetime import datetime, timezone
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings

from core.models import Branch, InvoiceTemplate, PaperSize, PaymentMethod, Sale, SaleLineItem
from core.services.invoicing.defaults import default_schema
from core.services.invoicing.exceptions import (
    ActiveTemplateProtectedError, NotFoundError, ValidationError,
)
from core.services.invoicing.providers import BranchProvider, SaleProvider
from core.services.invoicing.store import TemplateStore, template_schema


class TemplateStoreTestCase(TestCase):
    """Test cases for TemplateStore"""

    def setUp(self):
        """Set up test data"""
        self.branch = Branch.objects.create(code='RUH01', name_en='Riyadh Main', tax_number='300000000000003')
        self.other_branch = Branch.objects.create(code='JED01', name_en='Jeddah')
        self.store = TemplateStore(self.branch)

    def create(self, name='Receipt', **kwargs):
        kwargs.setdefault('schema', default_schema())
        return self.store.create(name=name, **kwargs)

    def test_create_template(self):
        template = self.create(description='80mm receipt')
        self.assertEqual(template.branch, self.branch)
        self.assertEqual(template.paper_size, PaperSize.THERMAL_80)
        self.assertFalse(template.is_active)
        self.assertEqual(template.schema['version'], '1.0')

    def test_create_takes_paper_size_from_schema(self):
        template = self.create(schema=default_schema(PaperSize.A4))
        self.assertEqual(template.paper_size, PaperSize.A4)

    def test_create_rejects_invalid_schema(self):
        with self.assertRaises(ValidationError):
            self.create(schema={'sections': 'nope'})
        self.assertEqual(InvoiceTemplate.objects.count(), 0)

    def test_create_requires_name(self):
        with self.assertRaises(ValidationError):
            self.create(name='  ')

    def test_create_custom_requires_dimensions(self):
        with self.assertRaises(ValidationError):
            self.create(paper_size=PaperSize.CUSTOM, custom_width=100)
        template = self.create(paper_size=PaperSize.CUSTOM, custom_width=100, custom_height=150)
        self.assertEqual(template.custom_width, 100)
        self.assertEqual(template_schema(template).width_mm, 100)

    def test_create_rejects_dimensions_for_fixed_paper(self):
        with self.assertRaises(ValidationError):
            self.create(paper_size=PaperSize.A4, custom_width=100, custom_height=150)

    def test_create_active_replaces_previous(self):
        first = self.create(name='First', set_as_active=True)
        second = self.create(name='Second', set_as_active=True)
        first.refresh_from_db()
        self.assertFalse(first.is_active)
        self.assertTrue(second.is_active)
        self.assertEqual(self.store.get_active_template(), second)

    def test_set_active_is_exclusive(self):
        templates = [self.create(name=f'T{i}') for i in range(3)]
        for template in templates:
            self.store.set_active(template.id)
            active = InvoiceTemplate.objects.filter(branch=self.branch, is_active=True)
            self.assertEqual(list(active), [InvoiceTemplate.objects.get(pk=template.id)])

    def test_set_active_is_per_branch(self):
        mine = self.create(name='Mine', set_as_active=True)
        theirs = TemplateStore(self.other_branch).create(name='Theirs', schema=default_schema(), set_as_active=True)
        mine.refresh_from_db()
        self.assertTrue(mine.is_active)
        self.assertTrue(theirs.is_active)

    def test_set_active_unknown_template(self):
        active = self.create(set_as_active=True)
        with self.assertRaises(NotFoundError):
            self.store.set_active(99999)
        active.refresh_from_db()
        self.assertTrue(active.is_active)

    def test_set_active_other_branch_template(self):
        theirs = TemplateStore(self.other_branch).create(name='Theirs', schema=default_schema())
        with self.assertRaises(NotFoundError):
            self.store.set_active(theirs.id)

    def test_database_rejects_two_active(self):
        self.create(set_as_active=True)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                InvoiceTemplate.objects.create(
                    branch=self.branch, name='Rogue', schema=default_schema(), is_active=True
                )

    def test_delete_inactive(self):
        template = self.create()
        self.store.delete(template.id)
        self.assertFalse(InvoiceTemplate.objects.filter(pk=template.id).exists())

    def test_delete_active_protected(self):
        template = self.create(set_as_active=True)
        with self.assertRaises(ActiveTemplateProtectedError):
            self.store.delete(template.id)
        template.refresh_from_db()
        self.assertTrue(template.is_active)

    def test_model_delete_active_protected(self):
        template = self.create(set_as_active=True)
        with self.assertRaises(ActiveTemplateProtectedError):
            template.delete()

    def test_delete_unknown(self):
        with self.assertRaises(NotFoundError):
            self.store.delete(99999)

    def test_get_by_id(self):
        template = self.create()
        self.assertEqual(self.store.get_by_id(template.id), template)
        with self.assertRaises(NotFoundError):
            self.store.get_by_id(99999)

    def test_update_replaces_content(self):
        template = self.create(set_as_active=True)
        updated = self.store.update(
            template.id, name='A4 Invoice', schema=default_schema(PaperSize.A4),
            paper_size=PaperSize.A4,
        )
        self.assertEqual(updated.name, 'A4 Invoice')
        self.assertEqual(updated.paper_size, PaperSize.A4)
        self.assertTrue(updated.is_active)

    def test_update_rejects_invalid_schema(self):
        template = self.create()
        with self.assertRaises(ValidationError):
            self.store.update(template.id, name='Broken', schema={'sections': [{'id': 'x'}]})
        template.refresh_from_db()
        self.assertEqual(template.name, 'Receipt')

    def test_duplicate_is_inactive(self):
        original = self.create(set_as_active=True)
        copy = self.store.duplicate(original.id, 'Receipt (copy)')
        self.assertFalse(copy.is_active)
        self.assertEqual(copy.schema, original.schema)
        self.assertEqual(copy.paper_size, original.paper_size)
        original.refresh_from_db()
        self.assertTrue(original.is_active)

    def test_list_templates_active_first(self):
        self.create(name='Old')
        active = self.create(name='Active', set_as_active=True)
        self.create(name='New')
        templates = self.store.list_templates()
        self.assertEqual(templates[0], active)
        self.assertEqual(len(templates), 3)


class ProvidersTestCase(TestCase):
    """Test cases for SaleProvider and BranchProvider"""

    def setUp(self):
        self.branch = Branch.objects.create(
            code='RUH01', name_en='Riyadh Main', name_ar='الرياض', tax_number='300000000000003',
        )
        self.sale = Sale.objects.create(
            branch=self.branch,
            invoice_number='INV-0001',
            sale_date=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
            payment_method=PaymentMethod.CARD,
            subtotal=Decimal('50.00'),
            total_discount=Decimal('0.00'),
            tax_amount=Decimal('7.50'),
            total=Decimal('57.50'),
        )
        SaleLineItem.objects.create(
            sale=self.sale, position=2, product_name='Tea', quantity=Decimal('1'),
            unit_price=Decimal('20.00'), line_total=Decimal('20.00'),
        )
        SaleLineItem.objects.create(
            sale=self.sale, position=1, product_name='Coffee', quantity=Decimal('2'),
            unit_price=Decimal('15.00'), line_total=Decimal('30.00'), notes='No sugar',
        )

    def test_sale_for_rendering(self):
        sale = SaleProvider().get_sale_for_rendering(self.sale.id)
        self.assertEqual(sale.invoice_number, 'INV-0001')
        self.assertEqual(sale.payment_method, 'Card')
        self.assertIsNone(sale.customer)
        self.assertEqual([i.product_name for i in sale.line_items], ['Coffee', 'Tea'])
        self.assertEqual(sale.line_items[0].notes, 'No sugar')
        self.assertIsNone(sale.line_items[1].notes)

    def test_sale_with_customer(self):
        self.sale.customer_name = 'Acme Trading'
        self.sale.save()
        sale = SaleProvider().get_sale_for_rendering(self.sale.id)
        self.assertEqual(sale.customer.name, 'Acme Trading')

    def test_missing_sale(self):
        with self.assertRaises(NotFoundError):
            SaleProvider().get_sale_for_rendering(99999)

    def test_single_branch_is_default(self):
        branch = BranchProvider().get_branch_info()
        self.assertEqual(branch.legal_name, 'الرياض')
        self.assertEqual(branch.vat_number, '300000000000003')

    def test_ambiguous_default_branch(self):
        Branch.objects.create(code='JED01', name_en='Jeddah')
        with self.assertRaises(NotFoundError):
            BranchProvider().get_branch_info()

    def test_configured_default_branch(self):
        other = Branch.objects.create(code='JED01', name_en='Jeddah')
        with override_settings(INVOICING={'DEFAULT_BRANCH_ID': other.id}):
            self.assertEqual(BranchProvider().get_branch_info().name_en, 'Jeddah')

    def test_missing_branch(self):
        with self.assertRaises(NotFoundError):
            BranchProvider().get_branch_info(99999)
