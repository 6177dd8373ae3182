"""
Invoicing configuration.

Values come from the ``INVOICING`` dict in Django settings, merged over the
defaults below. Reading is cheap, so nothing is cached here.

Example settings:
    INVOICING = {
        'DEFAULT_CURRENCY': 'SAR',
        'DEFAULT_BRANCH_ID': 1,
    }
"""

from typing import Any

from django.conf import settings


DEFAULTS = {
    'DEFAULT_CURRENCY': 'SAR',
    'DEFAULT_BRANCH_ID': None,
    'DEFAULT_LOCALE': 'en',
    'QR_BOX_SIZE': 4,
    'QR_BORDER': 2,
    'PDF_BASE_URL': '',
    # Page length used for continuous thermal rolls
    'ROLL_PAGE_HEIGHT_MM': 297,
}


def get_setting(name: str) -> Any:
    """
    Get an invoicing setting, falling back to the built-in default.

    Raises:
        KeyError: If the setting name is unknown
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown invoicing setting '{name}'")
    overrides = getattr(settings, 'INVOICING', None) or {}
    return overrides.get(name, DEFAULTS[name])
