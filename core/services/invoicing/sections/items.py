"""
Items table renderer.

Each line item renders one row. A line item with non-blank notes is followed
immediately by exactly one detail row spanning all columns; a line item
with blank or missing notes gets no detail row. The decision is made per
item.
"""

from django.utils.html import format_html, format_html_join

from ..dto import LineItem
from ..formatting import format_amount, format_quantity
from ..schema import FieldDescriptor, Section
from .base import RenderContext, join_html, wrap_section


DEFAULT_COLUMNS = (
    FieldDescriptor('name', 'Item'),
    FieldDescriptor('quantity', 'Qty'),
    FieldDescriptor('price', 'Price'),
    FieldDescriptor('total', 'Total'),
)

NUMERIC_COLUMNS = {'quantity', 'price', 'discount', 'vat', 'total'}

# Notes are rendered as detail rows, never as a column
DETAIL_ONLY_COLUMNS = {'notes'}


def visible_columns(section: Section) -> list[FieldDescriptor]:
    columns = section.fields or DEFAULT_COLUMNS
    return [c for c in columns if c.visible and c.key not in DETAIL_ONLY_COLUMNS]


def _cell_value(key: str, item: LineItem) -> str:
    if key == 'name':
        return item.product_name
    if key == 'barcode':
        return item.barcode
    if key == 'unit':
        return item.unit
    if key == 'quantity':
        return format_quantity(item.quantity)
    if key == 'price':
        return format_amount(item.unit_price)
    if key == 'discount':
        return format_amount(item.discount)
    if key == 'vat':
        return format_amount(item.vat_amount)
    if key == 'total':
        return format_amount(item.line_total)
    raise KeyError(key)


def _css_class(key: str) -> str:
    return 'text-right' if key in NUMERIC_COLUMNS else ''


def _header_row(columns: list[FieldDescriptor]):
    return format_html(
        '<thead><tr>{}</tr></thead>',
        format_html_join(
            '',
            '<th class="{}"{}>{}</th>',
            (
                (_css_class(c.key), format_html(' style="width: {}"', c.width) if c.width else '', c.label)
                for c in columns
            ),
        ),
    )


def _item_row(item: LineItem, columns: list[FieldDescriptor]):
    return format_html(
        '<tr class="item-row">{}</tr>',
        format_html_join(
            '',
            '<td class="{}">{}</td>',
            ((_css_class(c.key), _cell_value(c.key, item)) for c in columns),
        ),
    )


def _notes_row(item: LineItem, colspan: int, label: str):
    return format_html(
        '<tr class="item-notes"><td colspan="{}">'
        '<span class="item-notes-label">{}:</span> <span class="item-notes-text">{}</span>'
        '</td></tr>',
        colspan,
        label,
        item.notes.strip(),
    )


def render_items(section: Section, context: RenderContext):
    columns = visible_columns(section)
    notes_label = section.option('notesLabel') or 'Note'

    rows = []
    for item in context.sale.line_items:
        rows.append(_item_row(item, columns))
        if item.has_notes:
            rows.append(_notes_row(item, len(columns), notes_label))

    table = format_html(
        '<table class="items-table">{}<tbody>{}</tbody></table>',
        _header_row(columns),
        join_html(rows),
    )
    return wrap_section(section, table)
