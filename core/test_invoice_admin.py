"""
Tests for the invoice template admin.
"""

import json
from unittest.mock import patch

from django.contrib import admin, messages
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import Client, TestCase, RequestFactory
from django.urls import reverse

from core.admin import InvoiceTemplateAdmin
from core.models import Branch, InvoiceTemplate
from core.services.invoicing.defaults import default_schema
from core.services.invoicing.store import TemplateStore


class InvoiceTemplateAdminTestCase(TestCase):
    """Test cases for InvoiceTemplateAdmin actions"""

    def setUp(self):
        """Set up test data"""
        self.user = User.objects.create_superuser(username='admin', password='testpass')
        self.request = RequestFactory().post('/admin/core/invoicetemplate/')
        self.request.user = self.user
        self.model_admin = InvoiceTemplateAdmin(InvoiceTemplate, admin.site)

        self.branch = Branch.objects.create(code='RUH01', name_en='Riyadh Main')
        store = TemplateStore(self.branch)
        self.active = store.create(name='Active', schema=default_schema(), set_as_active=True)
        self.spare = store.create(name='Spare', schema=default_schema())

    def test_activate_template(self):
        queryset = InvoiceTemplate.objects.filter(pk=self.spare.pk)
        with patch.object(self.model_admin, 'message_user') as message_user:
            self.model_admin.activate_template(self.request, queryset)

        self.active.refresh_from_db()
        self.spare.refresh_from_db()
        self.assertFalse(self.active.is_active)
        self.assertTrue(self.spare.is_active)
        self.assertEqual(message_user.call_args.kwargs['level'], messages.SUCCESS)

    def test_activate_requires_single_selection(self):
        with patch.object(self.model_admin, 'message_user') as message_user:
            self.model_admin.activate_template(self.request, InvoiceTemplate.objects.all())

        self.active.refresh_from_db()
        self.assertTrue(self.active.is_active)
        self.assertEqual(message_user.call_args.kwargs['level'], messages.ERROR)

    def test_bulk_delete_protects_active(self):
        with patch.object(self.model_admin, 'message_user') as message_user:
            self.model_admin.delete_queryset(self.request, InvoiceTemplate.objects.filter(pk=self.active.pk))

        self.assertTrue(InvoiceTemplate.objects.filter(pk=self.active.pk).exists())
        self.assertEqual(message_user.call_args.kwargs['level'], messages.ERROR)

    def test_bulk_delete_with_active_deletes_nothing(self):
        """A selection containing the active template leaves every row in place"""
        extra = TemplateStore(self.branch).create(name='Extra', schema=default_schema())
        # The inactive rows come first
        queryset = InvoiceTemplate.objects.order_by('-id')

        with patch.object(self.model_admin, 'message_user') as message_user:
            self.model_admin.delete_queryset(self.request, queryset)

        self.assertEqual(InvoiceTemplate.objects.count(), 3)
        self.assertTrue(InvoiceTemplate.objects.filter(pk=extra.pk).exists())
        self.assertIn('Active', message_user.call_args.args[1])

    def test_bulk_delete_inactive(self):
        extra = TemplateStore(self.branch).create(name='Extra', schema=default_schema())
        queryset = InvoiceTemplate.objects.filter(pk__in=[self.spare.pk, extra.pk])

        self.model_admin.delete_queryset(self.request, queryset)

        self.assertEqual(list(InvoiceTemplate.objects.all()), [self.active])

    def test_delete_permission(self):
        self.assertFalse(self.model_admin.has_delete_permission(self.request, self.active))
        self.assertTrue(self.model_admin.has_delete_permission(self.request, self.spare))
        self.assertTrue(self.model_admin.has_delete_permission(self.request))


class InvoiceTemplateAdminViewsTestCase(TestCase):
    """Test cases for the invoice template admin pages"""

    def setUp(self):
        self.user = User.objects.create_superuser(username='admin', password='testpass')
        self.client = Client()
        self.client.login(username='admin', password='testpass')

        self.branch = Branch.objects.create(code='RUH01', name_en='Riyadh Main')
        store = TemplateStore(self.branch)
        self.active = store.create(name='Active', schema=default_schema(), set_as_active=True)
        self.spare = store.create(name='Spare', schema=default_schema())

    def _form_data(self, schema, **overrides):
        data = {
            'branch': self.branch.pk,
            'name': 'From admin',
            'description': '',
            'paper_size': 'Thermal80mm',
            'custom_width': '',
            'custom_height': '',
            'schema': json.dumps(schema),
        }
        data.update(overrides)
        return data

    def test_delete_active_template_forbidden(self):
        response = self.client.post(
            reverse('admin:core_invoicetemplate_delete', args=[self.active.pk]),
            {'post': 'yes'}
        )
        self.assertEqual(response.status_code, 403)
        self.assertTrue(InvoiceTemplate.objects.filter(pk=self.active.pk).exists())

    def test_delete_inactive_template(self):
        response = self.client.post(
            reverse('admin:core_invoicetemplate_delete', args=[self.spare.pk]),
            {'post': 'yes'}
        )
        self.assertEqual(response.status_code, 302)
        self.assertFalse(InvoiceTemplate.objects.filter(pk=self.spare.pk).exists())

    def test_add_template(self):
        response = self.client.post(
            reverse('admin:core_invoicetemplate_add'),
            self._form_data(default_schema())
        )
        self.assertEqual(response.status_code, 302)
        template = InvoiceTemplate.objects.get(name='From admin')
        self.assertEqual(template.created_by, self.user)
        self.assertFalse(template.is_active)

    def test_add_rejects_invalid_schema(self):
        schema = {'sections': [{'id': 'x', 'type': 'bogus', 'order': 1}]}
        response = self.client.post(
            reverse('admin:core_invoicetemplate_add'),
            self._form_data(schema)
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn('schema', response.context['adminform'].form.errors)
        self.assertFalse(InvoiceTemplate.objects.filter(name='From admin').exists())

    def test_change_rejects_invalid_schema(self):
        original = self.spare.schema
        response = self.client.post(
            reverse('admin:core_invoicetemplate_change', args=[self.spare.pk]),
            self._form_data({'sections': 'not a list'}, name='Spare')
        )
        self.assertEqual(response.status_code, 200)
        self.spare.refresh_from_db()
        self.assertEqual(self.spare.schema, original)


class InvoiceTemplateCleanTestCase(TestCase):
    """Test cases for InvoiceTemplate.clean"""

    def setUp(self):
        self.branch = Branch.objects.create(code='RUH01', name_en='Riyadh Main')

    def test_valid_schema(self):
        template = InvoiceTemplate(branch=self.branch, name='Valid', schema=default_schema())
        template.full_clean()

    def test_invalid_schema(self):
        schema = default_schema()
        schema['sections'][0]['order'] = 'first'
        template = InvoiceTemplate(branch=self.branch, name='Invalid', schema=schema)
        with self.assertRaises(DjangoValidationError) as cm:
            template.full_clean()
        self.assertIn('schema', cm.exception.message_dict)

    def test_custom_size_checked_against_schema(self):
        template = InvoiceTemplate(
            branch=self.branch, name='Custom', schema=default_schema(),
            paper_size='Custom', custom_width=100, custom_height=150,
        )
        template.full_clean()
