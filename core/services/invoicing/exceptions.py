"""
Invoicing-specific exceptions.

These exceptions provide a consistent way to report schema, encoding and
lookup problems across the invoice rendering pipeline and its collaborators.

Design principles:
- Malformed schemas are rejected before any markup is produced
- Nothing financially material is ever silently dropped
- Lookups never substitute a different template, sale or branch
"""


class InvoicingError(Exception):
    """Base exception for all invoicing errors."""
    pass


class ValidationError(InvoicingError):
    """
    Raised when a template schema or template record is malformed.

    Example:
        Missing ``sections`` list, a custom paper size without dimensions,
        or a summary field key the renderer does not know.
    """
    pass


class UnsupportedSectionError(ValidationError):
    """
    Raised when a section kind has no registered renderer.

    Unknown sections are never skipped, since dropping a section could omit
    financially material content from the printed invoice.
    """
    pass


class EncodingError(InvoicingError):
    """
    Raised when a compliance field cannot be TLV encoded.

    Typically a value longer than 255 bytes. Aborts QR generation only; the
    invoice text still renders.
    """
    pass


class NotFoundError(InvoicingError):
    """Raised when a template, sale or branch does not exist."""
    pass


class ActiveTemplateProtectedError(InvoicingError):
    """
    Raised when a destructive action targets the active template.

    The store state is unchanged when this is raised. Activate another
    template first.
    """
    pass
