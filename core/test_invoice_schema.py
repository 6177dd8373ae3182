"""
Tests for invoice template schema parsing and validation.
"""

import json

from django.test import SimpleTestCase

from core.models import PaperSize
from core.services.invoicing.defaults import DEFAULT_SCHEMAS, default_schema
from core.services.invoicing.exceptions import UnsupportedSectionError, ValidationError
from core.services.invoicing.schema import (
    InvoiceSchema, SectionKind, paper_width_mm, parse_schema,
)


def minimal_schema(**overrides):
    data = {
        'version': '1.0',
        'paperSize': 'Thermal80mm',
        'sections': [
            {'id': 'title', 'type': 'title', 'order': 1, 'visible': True, 'config': {}},
        ],
    }
    data.update(overrides)
    return data


class ParseSchemaTestCase(SimpleTestCase):
    """Test cases for parse_schema"""

    def test_parse_default_schemas(self):
        """All shipped default schemas are valid"""
        for paper_size, data in DEFAULT_SCHEMAS.items():
            schema = parse_schema(data)
            self.assertIsInstance(schema, InvoiceSchema)
            self.assertEqual(schema.paper_size, paper_size)
            self.assertEqual(len(schema.sections), 7)

    def test_parse_json_string(self):
        schema = parse_schema(json.dumps(minimal_schema()))
        self.assertEqual(schema.sections[0].kind, SectionKind.TITLE)

    def test_invalid_json(self):
        with self.assertRaises(ValidationError):
            parse_schema('{not json')

    def test_defaults(self):
        schema = parse_schema(minimal_schema())
        self.assertFalse(schema.rtl)
        self.assertTrue(schema.price_includes_vat)
        self.assertEqual(schema.direction, 'ltr')
        self.assertEqual(schema.styling.font_family, 'Arial, sans-serif')

    def test_missing_sections(self):
        with self.assertRaises(ValidationError):
            parse_schema({'paperSize': 'A4'})

    def test_section_missing_required_keys(self):
        for missing in ('id', 'type', 'order'):
            section = {'id': 's1', 'type': 'title', 'order': 1}
            del section[missing]
            with self.assertRaises(ValidationError):
                parse_schema(minimal_schema(sections=[section]))

    def test_unknown_section_type(self):
        """Unknown section kinds are rejected, never skipped"""
        schema = minimal_schema(sections=[{'id': 'x', 'type': 'advert', 'order': 1}])
        with self.assertRaises(UnsupportedSectionError):
            parse_schema(schema)

    def test_unsupported_section_is_validation_error(self):
        self.assertTrue(issubclass(UnsupportedSectionError, ValidationError))

    def test_duplicate_section_ids(self):
        sections = [
            {'id': 'a', 'type': 'title', 'order': 1},
            {'id': 'a', 'type': 'footer', 'order': 2},
        ]
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(sections=sections))

    def test_rtl_must_be_boolean(self):
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(rtl='true'))

    def test_visible_must_be_boolean(self):
        sections = [{'id': 'a', 'type': 'title', 'order': 1, 'visible': 1}]
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(sections=sections))

    def test_order_must_be_integer(self):
        sections = [{'id': 'a', 'type': 'title', 'order': '1'}]
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(sections=sections))

    def test_unknown_summary_field(self):
        """A summary key without a known computation is an error"""
        sections = [{
            'id': 'summary', 'type': 'summary', 'order': 1,
            'config': {'fields': [{'key': 'tip', 'label': 'Tip', 'visible': True}]},
        }]
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(sections=sections))

    def test_items_section_needs_a_visible_column(self):
        sections = [{
            'id': 'items', 'type': 'items', 'order': 1,
            'config': {'columns': [
                {'key': 'name', 'label': 'Item', 'visible': False},
                {'key': 'notes', 'label': 'Notes', 'visible': True},
            ]},
        }]
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(sections=sections))

    def test_empty_field_list_rejected(self):
        """An explicit empty list is not the same as leaving the list out"""
        for kind, list_key in (('customer', 'fields'), ('metadata', 'fields'),
                               ('summary', 'fields'), ('items', 'columns')):
            sections = [{'id': kind, 'type': kind, 'order': 1, 'config': {list_key: []}}]
            with self.assertRaises(ValidationError):
                parse_schema(minimal_schema(sections=sections))

    def test_missing_field_list_uses_defaults(self):
        sections = [{'id': 'summary', 'type': 'summary', 'order': 1}]
        section = parse_schema(minimal_schema(sections=sections)).sections[0]
        self.assertEqual(section.fields, ())

    def test_field_descriptors_parsed(self):
        sections = [{
            'id': 'summary', 'type': 'summary', 'order': 1,
            'config': {'fields': [
                {'key': 'total', 'label': 'Grand Total', 'visible': True, 'highlight': True},
            ], 'extra': 'kept'},
        }]
        section = parse_schema(minimal_schema(sections=sections)).sections[0]
        self.assertEqual(section.fields[0].label, 'Grand Total')
        self.assertTrue(section.fields[0].highlight)
        self.assertEqual(section.option('extra'), 'kept')
        self.assertNotIn('fields', section.config)

    def test_styling_values_validated(self):
        styling = {'fontFamily': 'Arial</style><script>', 'fontSize': {}, 'spacing': {}}
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(styling=styling))

    def test_to_dict_round_trip(self):
        schema = parse_schema(default_schema(PaperSize.A4))
        self.assertEqual(parse_schema(schema.to_dict()), schema)


class PaperSizeTestCase(SimpleTestCase):
    """Test cases for paper sizes and custom dimensions"""

    def test_paper_widths(self):
        self.assertEqual(paper_width_mm(PaperSize.THERMAL_58), 58)
        self.assertEqual(paper_width_mm(PaperSize.THERMAL_80), 80)
        self.assertEqual(paper_width_mm(PaperSize.A4), 210)
        self.assertEqual(paper_width_mm(PaperSize.CUSTOM, 100), 100)

    def test_unknown_paper_size(self):
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(paperSize='Letter'))

    def test_custom_requires_dimensions(self):
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(paperSize='Custom'))
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(paperSize='Custom', customWidth=100))

    def test_custom_dimensions_must_be_positive(self):
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(paperSize='Custom', customWidth=0, customHeight=100))
        with self.assertRaises(ValidationError):
            parse_schema(minimal_schema(paperSize='Custom', customWidth=100, customHeight=-5))

    def test_custom_dimensions(self):
        schema = parse_schema(minimal_schema(paperSize='Custom', customWidth=100, customHeight=150))
        self.assertEqual(schema.width_mm, 100)
        self.assertEqual(schema.height_mm, 150)

    def test_thermal_rolls_have_no_height(self):
        self.assertIsNone(parse_schema(minimal_schema()).height_mm)
        self.assertEqual(parse_schema(minimal_schema(paperSize='A4')).height_mm, 297)

    def test_template_columns_override_schema(self):
        """The paper size stored on the template wins over the schema's"""
        schema = parse_schema(
            minimal_schema(paperSize='Thermal80mm'),
            paper_size=PaperSize.CUSTOM,
            custom_width=120,
            custom_height=200,
        )
        self.assertEqual(schema.paper_size, PaperSize.CUSTOM)
        self.assertEqual(schema.width_mm, 120)
