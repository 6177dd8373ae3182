"""
Section renderers package

Contains one renderer per section kind, registered in the section registry.
"""

from ..schema import SectionKind
from .document import render_footer, render_header, render_title
from .items import render_items
from .parties import render_customer, render_metadata
from .registry import get_registry, get_renderer, register_renderer
from .summary import SummaryFieldSpec, register_summary_field, render_summary


def register_all_renderers():
    """Register the built-in section renderers"""
    register_renderer(SectionKind.HEADER, render_header)
    register_renderer(SectionKind.TITLE, render_title)
    register_renderer(SectionKind.CUSTOMER, render_customer)
    register_renderer(SectionKind.METADATA, render_metadata)
    register_renderer(SectionKind.ITEMS, render_items)
    register_renderer(SectionKind.SUMMARY, render_summary)
    register_renderer(SectionKind.FOOTER, render_footer)


# Auto-register renderers when the package is imported
register_all_renderers()

__all__ = [
    'get_registry',
    'get_renderer',
    'register_renderer',
    'register_summary_field',
    'SummaryFieldSpec',
]
