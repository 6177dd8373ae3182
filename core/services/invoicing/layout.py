"""
Layout Composer

Turns a validated schema and a render context into one HTML document:

1. Sort sections by ``order`` (stable on ties)
2. Skip invisible sections
3. Render each remaining section through the section registry
4. Wrap the fragments in a container with the physical paper width and the
   schema's explicit text direction
5. Emit page sizing rules so the on-screen preview and the printed page
   have the same width
"""

import logging

from django.utils.html import format_html
from django.utils.safestring import mark_safe

from .config import get_setting
from .schema import InvoiceSchema, Section
from .sections import get_renderer
from .sections.base import RenderContext, join_html


logger = logging.getLogger(__name__)


def ordered_visible_sections(schema: InvoiceSchema) -> list[Section]:
    """Visible sections in render order. ``sorted`` is stable, so ties keep schema order."""
    return [s for s in sorted(schema.sections, key=lambda s: s.order) if s.visible]


def page_styles(schema: InvoiceSchema) -> str:
    """Build the stylesheet for a document, including print sizing rules."""
    width = schema.width_mm
    height = schema.height_mm or get_setting('ROLL_PAGE_HEIGHT_MM')
    styling = schema.styling
    align = 'right' if schema.rtl else 'left'

    return f"""
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
@page {{ size: {width}mm {height}mm; margin: 0; }}
html, body {{ background: #fff; color: #000; }}
body {{ font-family: {styling.font_family}; font-size: {styling.body_size}; line-height: {styling.line_height}; }}
.invoice-container {{ width: {width}mm; max-width: {width}mm; margin: 0 auto; padding: {styling.padding}; text-align: {align}; page-break-inside: avoid; break-inside: avoid; }}
.section {{ margin-bottom: {styling.section_gap}; }}
.section-header {{ border-bottom: 2px solid #000; padding-bottom: 10px; }}
.align-left {{ text-align: left; }}
.align-center {{ text-align: center; }}
.align-right {{ text-align: right; }}
.logo {{ max-width: 100px; max-height: 60px; margin-bottom: 10px; }}
.branch-name {{ font-size: {styling.header_size}; font-weight: bold; margin-bottom: 5px; }}
.title {{ font-size: {styling.title_size}; font-weight: bold; margin: 10px 0; text-transform: uppercase; text-align: center; }}
.info-row, .summary-row {{ display: flex; justify-content: space-between; margin-bottom: 5px; }}
.info-label {{ font-weight: 600; }}
.items-table {{ width: 100%; border-collapse: collapse; margin: 10px 0; }}
.items-table th {{ border-bottom: 1px solid #000; padding: 5px 2px; font-size: 10px; font-weight: 600; text-align: {align}; }}
.items-table td {{ padding: 5px 2px; border-bottom: 1px dashed #ccc; font-size: 11px; }}
.items-table .text-right {{ text-align: right; }}
.items-table tr.item-notes td {{ font-size: 10px; font-style: italic; border-bottom: 1px dashed #ccc; }}
.section-summary {{ border-top: 1px solid #000; padding-top: 10px; }}
.summary-row.total {{ font-weight: bold; font-size: 14px; border-top: 2px solid #000; padding-top: 5px; margin-top: 5px; }}
.section-footer {{ border-top: 1px solid #000; padding-top: 10px; font-size: {styling.footer_size}; text-align: center; }}
.qr-code {{ margin: 10px 0; }}
.qr-image {{ width: 128px; height: 128px; }}
@media print {{
  html, body {{ width: {width}mm; margin: 0; padding: 0; }}
  .invoice-container {{ width: {width}mm; max-width: {width}mm; margin: 0; page-break-inside: avoid; break-inside: avoid; }}
  .section, .items-table tr {{ page-break-inside: avoid; break-inside: avoid; }}
}}
""".strip()


def compose_document(schema: InvoiceSchema, context: RenderContext, *, title: str) -> str:
    """
    Compose the full HTML document.

    Raises:
        UnsupportedSectionError: If a section kind has no renderer
    """
    fragments = []
    for section in ordered_visible_sections(schema):
        renderer = get_renderer(section.kind)
        fragments.append(renderer(section, context))
    logger.debug(f"Composed {len(fragments)} sections for '{title}'")

    direction = schema.direction
    return str(format_html(
        '<!DOCTYPE html>\n'
        '<html lang="{}" dir="{}">\n'
        '<head>\n'
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        '<title>{}</title>\n'
        '<style>\n{}\n</style>\n'
        '</head>\n'
        '<body>\n'
        '<div class="invoice-container" dir="{}" data-paper-size="{}" data-width-mm="{}" style="width: {}mm">'
        '{}'
        '</div>\n'
        '</body>\n'
        '</html>\n',
        get_setting('DEFAULT_LOCALE'),
        direction,
        title,
        mark_safe(page_styles(schema)),
        direction,
        schema.paper_size,
        schema.width_mm,
        schema.width_mm,
        join_html(fragments),
    ))
