"""
Invoice Template Store

Persistence for invoice templates of one branch. Every write validates the
schema completely first; the active template is switched with an exclusive
swap so a branch never has two active templates.
"""

import json
import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from core.models import Branch, InvoiceTemplate, PaperSize

from .exceptions import ActiveTemplateProtectedError, NotFoundError, ValidationError
from .schema import InvoiceSchema, parse_schema


logger = logging.getLogger(__name__)


def template_schema(template: InvoiceTemplate) -> InvoiceSchema:
    """Parse a stored template's schema, with the template's paper columns applied."""
    return parse_schema(
        template.schema,
        paper_size=template.paper_size,
        custom_width=template.custom_width,
        custom_height=template.custom_height,
    )


class TemplateStore:
    """
    Template store scoped to one branch.

    Usage:
        store = TemplateStore(branch)
        template = store.create(name='Receipt', schema=DEFAULT_INVOICE_SCHEMA)
        store.set_active(template.id)
    """

    def __init__(self, branch: Branch):
        self.branch = branch

    def _queryset(self):
        return InvoiceTemplate.objects.filter(branch=self.branch)

    def list_templates(self) -> list[InvoiceTemplate]:
        """Active template first, then newest first."""
        return list(self._queryset().order_by('-is_active', '-created_at', '-id'))

    def get_active_template(self) -> Optional[InvoiceTemplate]:
        return self._queryset().filter(is_active=True).first()

    def get_by_id(self, template_id) -> InvoiceTemplate:
        """
        Raises:
            NotFoundError: If the template does not exist in this branch
        """
        template = self._queryset().filter(pk=template_id).first()
        if template is None:
            raise NotFoundError(f"Template with ID {template_id} not found")
        return template

    def validate(
        self,
        schema,
        paper_size: Optional[str] = None,
        custom_width: Optional[int] = None,
        custom_height: Optional[int] = None,
    ) -> tuple[dict, InvoiceSchema]:
        """
        Validate a schema and the template's paper settings together.

        Returns:
            (schema as a dict for storage, parsed InvoiceSchema)

        Raises:
            ValidationError: If anything is malformed
        """
        if isinstance(schema, (str, bytes)):
            try:
                schema = json.loads(schema)
            except ValueError as e:
                raise ValidationError(f"Schema is not valid JSON: {e}")

        if paper_size is not None and paper_size != PaperSize.CUSTOM and (custom_width or custom_height):
            raise ValidationError("Custom dimensions are only allowed for custom paper size")

        parsed = parse_schema(
            schema,
            paper_size=paper_size,
            custom_width=custom_width,
            custom_height=custom_height,
        )
        return schema, parsed

    def create(
        self,
        *,
        name: str,
        schema,
        paper_size: Optional[str] = None,
        custom_width: Optional[int] = None,
        custom_height: Optional[int] = None,
        description: str = '',
        set_as_active: bool = False,
        created_by=None,
    ) -> InvoiceTemplate:
        """
        Create a template, optionally making it the active one.

        Raises:
            ValidationError: If the name or schema is invalid
        """
        self._require_name(name)
        schema, parsed = self.validate(schema, paper_size, custom_width, custom_height)

        with transaction.atomic():
            if set_as_active:
                self._lock_branch()
                self._deactivate_all()

            template = InvoiceTemplate.objects.create(
                branch=self.branch,
                name=name,
                description=description or '',
                paper_size=parsed.paper_size,
                custom_width=parsed.custom_width,
                custom_height=parsed.custom_height,
                schema=schema,
                is_active=set_as_active,
                created_by=created_by,
            )

        logger.info(f"Created invoice template {template.id} '{name}' (active={set_as_active})")
        return template

    def update(
        self,
        template_id,
        *,
        name: str,
        schema,
        paper_size: Optional[str] = None,
        custom_width: Optional[int] = None,
        custom_height: Optional[int] = None,
        description: str = '',
    ) -> InvoiceTemplate:
        """
        Replace a template's content wholesale. The active flag is untouched.

        Raises:
            NotFoundError: If the template does not exist
            ValidationError: If the name or schema is invalid
        """
        template = self.get_by_id(template_id)
        self._require_name(name)
        schema, parsed = self.validate(schema, paper_size, custom_width, custom_height)

        template.name = name
        template.description = description or ''
        template.paper_size = parsed.paper_size
        template.custom_width = parsed.custom_width
        template.custom_height = parsed.custom_height
        template.schema = schema
        template.save()

        logger.info(f"Updated invoice template {template.id}")
        return template

    def duplicate(self, template_id, new_name: str, created_by=None) -> InvoiceTemplate:
        """
        Copy a template under a new name. Copies are never active.

        Raises:
            NotFoundError: If the template does not exist
            ValidationError: If the new name is blank
        """
        original = self.get_by_id(template_id)
        self._require_name(new_name)

        duplicate = InvoiceTemplate.objects.create(
            branch=self.branch,
            name=new_name,
            description=original.description,
            paper_size=original.paper_size,
            custom_width=original.custom_width,
            custom_height=original.custom_height,
            schema=original.schema,
            is_active=False,
            created_by=created_by,
        )

        logger.info(f"Duplicated invoice template {original.id} as {duplicate.id}")
        return duplicate

    def delete(self, template_id) -> None:
        """
        Delete an inactive template.

        Raises:
            NotFoundError: If the template does not exist
            ActiveTemplateProtectedError: If the template is the active one
        """
        with transaction.atomic():
            self._lock_branch()
            template = self.get_by_id(template_id)
            if template.is_active:
                raise ActiveTemplateProtectedError(
                    "Cannot delete the active template. Please set another template as active first."
                )
            template.delete()

        logger.info(f"Deleted invoice template {template_id}")

    def set_active(self, template_id) -> InvoiceTemplate:
        """
        Make a template the branch's only active template.

        The branch row is locked for the duration of the swap, so concurrent
        activations are serialized.

        Raises:
            NotFoundError: If the template does not exist
        """
        with transaction.atomic():
            self._lock_branch()
            template = self.get_by_id(template_id)
            self._deactivate_all(exclude_id=template.pk)
            if not template.is_active:
                template.is_active = True
                template.save(update_fields=['is_active', 'updated_at'])

        logger.info(f"Activated invoice template {template.id} for branch {self.branch.pk}")
        return template

    def _lock_branch(self) -> None:
        Branch.objects.select_for_update().get(pk=self.branch.pk)

    def _deactivate_all(self, exclude_id=None) -> None:
        active = self._queryset().filter(is_active=True)
        if exclude_id is not None:
            active = active.exclude(pk=exclude_id)
        active.update(is_active=False, updated_at=timezone.now())

    def _require_name(self, name: str) -> None:
        if not name or not str(name).strip():
            raise ValidationError("Template name is required")
