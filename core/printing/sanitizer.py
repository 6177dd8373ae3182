"""
HTML Sanitizer for Printing Framework

Template authors can put limited markup into free-text options such as the
footer notes. Everything outside the allowlist is stripped before the text
reaches an invoice.
"""

import bleach
from bleach.css_sanitizer import CSSSanitizer


# Inline formatting only; invoices never carry block layout from templates
ALLOWED_TAGS = [
    'p', 'br', 'strong', 'b', 'em', 'i', 'u', 's', 'small', 'span',
]

ALLOWED_ATTRIBUTES = {
    '*': ['class', 'style'],
}

ALLOWED_CSS_PROPERTIES = [
    'color', 'font-size', 'font-weight', 'font-style',
    'text-align', 'text-decoration',
]


def sanitize_html(html: str, *, strict: bool = False) -> str:
    """
    Sanitize template-provided markup.

    Args:
        html: HTML string to sanitize
        strict: If True, inline styles are removed as well

    Returns:
        Sanitized HTML string
    """
    attrs = ALLOWED_ATTRIBUTES.copy()

    css_sanitizer = None
    if not strict:
        css_sanitizer = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)
    else:
        attrs['*'] = [a for a in attrs.get('*', []) if a != 'style']

    return bleach.clean(
        html or '',
        tags=ALLOWED_TAGS,
        attributes=attrs,
        css_sanitizer=css_sanitizer,
        strip=True
    )
