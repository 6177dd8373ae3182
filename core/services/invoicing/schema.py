"""
Invoice Template Schema

Typed model of the JSON schema stored with each invoice template, and the
parser that validates it. A schema that fails validation is rejected as a
whole before any markup is produced.

Persisted shape:
    {
        "version": "1.0",
        "paperSize": "Thermal80mm",
        "customWidth": 100,          # Custom only
        "customHeight": 150,         # Custom only
        "rtl": false,
        "priceIncludesVat": true,
        "sections": [
            {"id": "header", "type": "header", "order": 1,
             "visible": true, "config": {...}},
            ...
        ],
        "styling": {...}
    }
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from core.models import PaperSize

from .exceptions import UnsupportedSectionError, ValidationError


SCHEMA_VERSION = '1.0'

PAPER_WIDTHS_MM = {
    PaperSize.THERMAL_58: 58,
    PaperSize.THERMAL_80: 80,
    PaperSize.A4: 210,
}

A4_HEIGHT_MM = 297

# Styling values end up inside a <style> block
STYLE_VALUE_PATTERN = re.compile(r"^[A-Za-z0-9 ,.'\"%#()-]*$")


class SectionKind(str, Enum):
    HEADER = 'header'
    TITLE = 'title'
    CUSTOMER = 'customer'
    METADATA = 'metadata'
    ITEMS = 'items'
    SUMMARY = 'summary'
    FOOTER = 'footer'


# Config list key and allowed descriptor keys per section kind
FIELD_LISTS = {
    SectionKind.CUSTOMER: 'fields',
    SectionKind.METADATA: 'fields',
    SectionKind.SUMMARY: 'fields',
    SectionKind.ITEMS: 'columns',
}

FIELD_KEYS = {
    SectionKind.CUSTOMER: {'name', 'vatNumber', 'phone', 'email'},
    SectionKind.METADATA: {
        'invoiceNumber', 'transactionId', 'orderNumber', 'date',
        'cashier', 'paymentMethod', 'priceVATLabel',
    },
    SectionKind.ITEMS: {
        'name', 'barcode', 'unit', 'quantity', 'price',
        'discount', 'vat', 'total', 'notes',
    },
    # Extended by sections.summary.register_summary_field
    SectionKind.SUMMARY: {
        'subtotal', 'discount', 'totalExclVat', 'vatAmount',
        'total', 'paid', 'change',
    },
}


def paper_width_mm(paper_size: str, custom_width: Optional[int] = None) -> int:
    """Physical paper width in millimetres."""
    if paper_size == PaperSize.CUSTOM:
        if not custom_width or custom_width <= 0:
            raise ValidationError("Custom paper size requires a positive width")
        return custom_width
    try:
        return PAPER_WIDTHS_MM[PaperSize(paper_size)]
    except ValueError:
        raise ValidationError(f"Unknown paper size '{paper_size}'")


@dataclass(frozen=True)
class FieldDescriptor:
    """One configured field (or column) of a section."""

    key: str
    label: str
    visible: bool = True
    highlight: bool = False
    width: str = ''

    def to_dict(self) -> dict:
        data = {'key': self.key, 'label': self.label, 'visible': self.visible}
        if self.highlight:
            data['highlight'] = True
        if self.width:
            data['width'] = self.width
        return data


@dataclass(frozen=True)
class Section:
    id: str
    kind: SectionKind
    order: int
    visible: bool = True
    config: dict = field(default_factory=dict)
    fields: tuple[FieldDescriptor, ...] = ()

    def option(self, name: str, default: Any = None) -> Any:
        return self.config.get(name, default)

    def flag(self, name: str, default: bool = False) -> bool:
        return bool(self.config.get(name, default))

    def to_dict(self) -> dict:
        config = dict(self.config)
        list_key = FIELD_LISTS.get(self.kind)
        if list_key and self.fields:
            config[list_key] = [f.to_dict() for f in self.fields]
        return {
            'id': self.id,
            'type': self.kind.value,
            'order': self.order,
            'visible': self.visible,
            'config': config,
        }


@dataclass(frozen=True)
class Styling:
    font_family: str = 'Arial, sans-serif'
    header_size: str = '14px'
    title_size: str = '16px'
    body_size: str = '12px'
    footer_size: str = '10px'
    section_gap: str = '15px'
    line_height: str = '1.5'
    padding: str = '10px'

    def to_dict(self) -> dict:
        return {
            'fontFamily': self.font_family,
            'fontSize': {
                'header': self.header_size,
                'title': self.title_size,
                'body': self.body_size,
                'footer': self.footer_size,
            },
            'spacing': {
                'sectionGap': self.section_gap,
                'lineHeight': self.line_height,
                'padding': self.padding,
            },
        }


@dataclass(frozen=True)
class InvoiceSchema:
    """
    Validated invoice template schema.

    ``rtl`` is always the explicit flag from the stored schema. Text
    direction is never guessed from the content being printed.
    """

    sections: tuple[Section, ...]
    paper_size: str = PaperSize.THERMAL_80
    custom_width: Optional[int] = None
    custom_height: Optional[int] = None
    rtl: bool = False
    price_includes_vat: bool = True
    version: str = SCHEMA_VERSION
    styling: Styling = field(default_factory=Styling)

    @property
    def width_mm(self) -> int:
        return paper_width_mm(self.paper_size, self.custom_width)

    @property
    def height_mm(self) -> Optional[int]:
        """Physical page height, or None for continuous rolls."""
        if self.paper_size == PaperSize.A4:
            return A4_HEIGHT_MM
        if self.paper_size == PaperSize.CUSTOM:
            return self.custom_height
        return None

    @property
    def direction(self) -> str:
        return 'rtl' if self.rtl else 'ltr'

    def to_dict(self) -> dict:
        data = {
            'version': self.version,
            'paperSize': str(self.paper_size),
            'rtl': self.rtl,
            'priceIncludesVat': self.price_includes_vat,
            'sections': [s.to_dict() for s in self.sections],
            'styling': self.styling.to_dict(),
        }
        if self.paper_size == PaperSize.CUSTOM:
            data['customWidth'] = self.custom_width
            data['customHeight'] = self.custom_height
        return data


def parse_schema(
    data,
    *,
    paper_size: Optional[str] = None,
    custom_width: Optional[int] = None,
    custom_height: Optional[int] = None,
) -> InvoiceSchema:
    """
    Parse and validate a persisted template schema.

    Args:
        data: Schema as a dict or a JSON string
        paper_size: Paper size stored on the template; overrides the schema's
        custom_width: Custom width in mm (template column)
        custom_height: Custom height in mm (template column)

    Returns:
        InvoiceSchema

    Raises:
        ValidationError: If the schema is malformed
        UnsupportedSectionError: If a section type is unknown
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise ValidationError(f"Schema is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ValidationError("Schema must be a JSON object")

    raw_sections = data.get('sections')
    if not isinstance(raw_sections, list):
        raise ValidationError("Schema requires a 'sections' list")

    if paper_size is None:
        paper_size = data.get('paperSize', PaperSize.THERMAL_80)
        custom_width = data.get('customWidth')
        custom_height = data.get('customHeight')

    paper_size = _parse_paper_size(paper_size)
    if paper_size == PaperSize.CUSTOM:
        custom_width = _require_dimension(custom_width, 'customWidth')
        custom_height = _require_dimension(custom_height, 'customHeight')
    else:
        custom_width = custom_height = None

    sections = tuple(_parse_section(raw, index) for index, raw in enumerate(raw_sections))
    seen = set()
    for section in sections:
        if section.id in seen:
            raise ValidationError(f"Duplicate section id '{section.id}'")
        seen.add(section.id)

    version = data.get('version', SCHEMA_VERSION)
    if not isinstance(version, str):
        raise ValidationError("'version' must be a string")

    return InvoiceSchema(
        sections=sections,
        paper_size=paper_size,
        custom_width=custom_width,
        custom_height=custom_height,
        rtl=_require_bool(data, 'rtl', False, 'schema'),
        price_includes_vat=_require_bool(data, 'priceIncludesVat', True, 'schema'),
        version=version,
        styling=_parse_styling(data.get('styling')),
    )


def _parse_paper_size(value) -> PaperSize:
    try:
        return PaperSize(value)
    except ValueError:
        raise ValidationError(f"Unknown paper size '{value}'")


def _require_dimension(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(
            f"Custom paper size requires a positive integer '{name}' (got {value!r})"
        )
    return value


def _require_bool(data: dict, name: str, default: bool, where: str) -> bool:
    value = data.get(name, default)
    if not isinstance(value, bool):
        raise ValidationError(f"'{name}' in {where} must be a boolean (got {value!r})")
    return value


def _parse_section(raw, index: int) -> Section:
    if not isinstance(raw, dict):
        raise ValidationError(f"Section #{index} must be an object")

    for name in ('id', 'type', 'order'):
        if name not in raw:
            raise ValidationError(f"Section #{index} is missing '{name}'")

    section_id = raw['id']
    if not isinstance(section_id, str) or not section_id:
        raise ValidationError(f"Section #{index} has an invalid id")

    try:
        kind = SectionKind(raw['type'])
    except ValueError:
        raise UnsupportedSectionError(
            f"Section '{section_id}' has unsupported type '{raw['type']}'"
        )

    order = raw['order']
    if isinstance(order, bool) or not isinstance(order, int):
        raise ValidationError(f"Section '{section_id}' order must be an integer")

    config = raw.get('config') or {}
    if not isinstance(config, dict):
        raise ValidationError(f"Section '{section_id}' config must be an object")

    fields = ()
    list_key = FIELD_LISTS.get(kind)
    if list_key and list_key in config:
        fields = _parse_fields(section_id, kind, config[list_key])
        config = {k: v for k, v in config.items() if k != list_key}

    if kind == SectionKind.ITEMS and fields:
        if not any(f.visible and f.key != 'notes' for f in fields):
            raise ValidationError(f"Items section '{section_id}' has no visible columns")

    return Section(
        id=section_id,
        kind=kind,
        order=order,
        visible=_require_bool(raw, 'visible', True, f"section '{section_id}'"),
        config=config,
        fields=fields,
    )


def _parse_fields(section_id: str, kind: SectionKind, raw_fields) -> tuple[FieldDescriptor, ...]:
    if not isinstance(raw_fields, list):
        raise ValidationError(f"Section '{section_id}' field list must be a list")
    if not raw_fields:
        raise ValidationError(f"Section '{section_id}' field list is empty; omit it to use the defaults")

    allowed = FIELD_KEYS[kind]
    fields = []
    for raw in raw_fields:
        if not isinstance(raw, dict) or not isinstance(raw.get('key'), str):
            raise ValidationError(f"Section '{section_id}' has a malformed field descriptor")
        key = raw['key']
        if key not in allowed:
            raise ValidationError(f"Section '{section_id}' has unknown field '{key}'")
        label = raw.get('label', key)
        if not isinstance(label, str):
            raise ValidationError(f"Field '{key}' label must be a string")
        width = raw.get('width', '')
        if not isinstance(width, str) or not STYLE_VALUE_PATTERN.match(width):
            raise ValidationError(f"Field '{key}' has an invalid width")
        fields.append(FieldDescriptor(
            key=key,
            label=label,
            visible=_require_bool(raw, 'visible', True, f"field '{key}'"),
            highlight=_require_bool(raw, 'highlight', False, f"field '{key}'"),
            width=width,
        ))
    return tuple(fields)


def _parse_styling(raw) -> Styling:
    if raw is None:
        return Styling()
    if not isinstance(raw, dict):
        raise ValidationError("'styling' must be an object")

    font_size = raw.get('fontSize') or {}
    spacing = raw.get('spacing') or {}
    if not isinstance(font_size, dict) or not isinstance(spacing, dict):
        raise ValidationError("'styling.fontSize' and 'styling.spacing' must be objects")

    defaults = Styling()
    values = {
        'font_family': raw.get('fontFamily') or defaults.font_family,
        'header_size': font_size.get('header') or defaults.header_size,
        'title_size': font_size.get('title') or defaults.title_size,
        'body_size': font_size.get('body') or defaults.body_size,
        'footer_size': font_size.get('footer') or defaults.footer_size,
        'section_gap': spacing.get('sectionGap') or defaults.section_gap,
        'line_height': spacing.get('lineHeight') or defaults.line_height,
        'padding': spacing.get('padding') or defaults.padding,
    }
    for name, value in values.items():
        if not isinstance(value, str) or not STYLE_VALUE_PATTERN.match(value):
            raise ValidationError(f"Invalid styling value for {name}: {value!r}")
    return Styling(**values)
