"""
Sale and branch providers.

Map persisted rows onto the read-only rendering inputs in ``dto.py``.
Missing rows raise NotFoundError; nothing is substituted.
"""

import logging
from typing import Optional

from core.models import Branch as BranchModel, Sale as SaleModel

from . import dto
from .config import get_setting
from .exceptions import NotFoundError


logger = logging.getLogger(__name__)


def branch_to_dto(branch: BranchModel) -> dto.Branch:
    return dto.Branch(
        name_en=branch.name_en,
        name_ar=branch.name_ar,
        vat_number=branch.tax_number,
        crn=branch.crn,
        address=branch.address,
        phone=branch.phone,
        email=branch.email,
        logo_url=branch.logo_path,
    )


def sale_to_dto(sale: SaleModel) -> dto.Sale:
    customer = None
    if sale.customer_name or sale.customer_vat_number or sale.customer_phone or sale.customer_email:
        customer = dto.Customer(
            name=sale.customer_name,
            vat_number=sale.customer_vat_number,
            phone=sale.customer_phone,
            email=sale.customer_email,
        )

    return dto.Sale(
        invoice_number=sale.invoice_number,
        transaction_id=sale.transaction_id,
        order_number=sale.order_number,
        invoice_type=sale.invoice_type,
        sale_date=sale.sale_date,
        cashier_name=sale.cashier_name,
        payment_method=sale.get_payment_method_display(),
        subtotal=sale.subtotal,
        total_discount=sale.total_discount,
        tax_amount=sale.tax_amount,
        total=sale.total,
        amount_paid=sale.amount_paid,
        change_returned=sale.change_returned,
        currency=sale.currency,
        customer=customer,
        line_items=tuple(
            dto.LineItem(
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
                notes=item.notes or None,
                barcode=item.barcode,
                unit=item.unit,
                discount=item.discount,
                vat_amount=item.vat_amount,
            )
            for item in sale.line_items.all()
        ),
    )


class SaleProvider:
    """Loads sales for rendering."""

    def get_sale(self, sale_id) -> SaleModel:
        try:
            return SaleModel.objects.select_related('branch').prefetch_related('line_items').get(pk=sale_id)
        except SaleModel.DoesNotExist:
            raise NotFoundError(f"Sale with ID {sale_id} not found")

    def get_sale_for_rendering(self, sale_id) -> dto.Sale:
        """
        Raises:
            NotFoundError: If the sale does not exist
        """
        return sale_to_dto(self.get_sale(sale_id))


class BranchProvider:
    """
    Loads the canonical branch record.

    Without an explicit id, the branch configured as
    ``INVOICING['DEFAULT_BRANCH_ID']`` is used, or the only branch when
    exactly one exists.
    """

    def get_branch(self, branch_id=None) -> BranchModel:
        if branch_id is None:
            branch_id = get_setting('DEFAULT_BRANCH_ID')

        if branch_id is not None:
            try:
                return BranchModel.objects.get(pk=branch_id)
            except BranchModel.DoesNotExist:
                raise NotFoundError(f"Branch with ID {branch_id} not found")

        branches = list(BranchModel.objects.all()[:2])
        if len(branches) != 1:
            raise NotFoundError(
                "No default branch configured and the branch cannot be determined"
            )
        return branches[0]

    def get_branch_info(self, branch_id: Optional[int] = None) -> dto.Branch:
        """
        Raises:
            NotFoundError: If the branch does not exist
        """
        return branch_to_dto(self.get_branch(branch_id))
