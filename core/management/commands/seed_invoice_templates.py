"""
Management command to seed the default invoice templates for a branch.

Creates a 58mm thermal, an 80mm thermal (active) and an A4 template when
the branch has no templates yet.

Usage:
    python manage.py seed_invoice_templates
    python manage.py seed_invoice_templates --branch 2

The command is idempotent - branches that already have templates are skipped.
"""

from django.core.management.base import BaseCommand, CommandError

from core.models import Branch
from core.services.invoicing.defaults import DEFAULT_TEMPLATES, default_schema
from core.services.invoicing.exceptions import InvoicingError
from core.services.invoicing.store import TemplateStore


class Command(BaseCommand):
    help = 'Seed default invoice templates (idempotent)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--branch',
            type=int,
            help='Branch ID to seed (default: all branches)',
        )

    def handle(self, *args, **options):
        branches = Branch.objects.all()
        if options['branch'] is not None:
            branches = branches.filter(pk=options['branch'])
            if not branches.exists():
                raise CommandError(f"Branch with ID {options['branch']} not found")

        for branch in branches:
            store = TemplateStore(branch)
            if store.list_templates():
                self.stdout.write(
                    self.style.WARNING(f'  SKIP: {branch} already has invoice templates')
                )
                continue

            try:
                for name, description, paper_size, active in DEFAULT_TEMPLATES:
                    store.create(
                        name=name,
                        description=description,
                        schema=default_schema(paper_size),
                        paper_size=paper_size,
                        set_as_active=active,
                    )
            except InvoicingError as e:
                raise CommandError(f"Failed to seed templates for {branch}: {e}")

            self.stdout.write(
                self.style.SUCCESS(f'  Seeded {len(DEFAULT_TEMPLATES)} templates for {branch}')
            )
