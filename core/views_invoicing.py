"""
Invoice template and invoice rendering views.

Template management endpoints return JSON in the usual
``{'success': ..., 'error': ...}`` shape. Previews and invoices are returned
as HTML, and as PDF for printing.
"""

import json
import logging

from django.contrib.auth.decorators import login_required
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from .printing import PdfRenderService
from .services.invoicing import InvoiceRenderingEngine
from .services.invoicing.compliance import ComplianceTag, decode_payload
from .services.invoicing.exceptions import (
    ActiveTemplateProtectedError,
    EncodingError,
    InvoicingError,
    NotFoundError,
    ValidationError,
)
from .services.invoicing.providers import BranchProvider, SaleProvider, branch_to_dto, sale_to_dto
from .services.invoicing.store import TemplateStore, template_schema

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ActiveTemplateProtectedError, 409),
    (EncodingError, 422),
)


def _error_response(error: InvoicingError) -> JsonResponse:
    status = 500
    for error_class, error_status in ERROR_STATUS:
        if isinstance(error, error_class):
            status = error_status
            break
    return JsonResponse({'success': False, 'error': str(error)}, status=status)


def _parse_body(request) -> dict:
    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        raise ValidationError("Request body is not valid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _int_param(request, name: str):
    value = request.GET.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")


def _store(request) -> TemplateStore:
    branch = BranchProvider().get_branch(_int_param(request, 'branch'))
    return TemplateStore(branch)


def _template_to_dict(template, include_schema: bool = True) -> dict:
    data = {
        'id': template.id,
        'branch_id': template.branch_id,
        'name': template.name,
        'description': template.description,
        'paper_size': template.paper_size,
        'custom_width': template.custom_width,
        'custom_height': template.custom_height,
        'is_active': template.is_active,
        'created_at': template.created_at.isoformat(),
        'updated_at': template.updated_at.isoformat(),
        'created_by': template.created_by.username if template.created_by else None,
    }
    if include_schema:
        data['schema'] = template.schema
    return data


def _template_kwargs(data: dict) -> dict:
    return {
        'name': data.get('name', ''),
        'schema': data.get('schema'),
        'paper_size': data.get('paper_size'),
        'custom_width': data.get('custom_width'),
        'custom_height': data.get('custom_height'),
        'description': data.get('description', ''),
    }


@login_required
@require_http_methods(["GET", "POST"])
def invoice_templates(request):
    """List the branch's templates, or create one."""
    try:
        store = _store(request)

        if request.method == 'GET':
            return JsonResponse({
                'success': True,
                'templates': [
                    _template_to_dict(t, include_schema=False) for t in store.list_templates()
                ],
            })

        data = _parse_body(request)
        set_as_active = data.get('set_as_active', False)
        if not isinstance(set_as_active, bool):
            raise ValidationError("'set_as_active' must be a boolean")

        template = store.create(
            set_as_active=set_as_active,
            created_by=request.user,
            **_template_kwargs(data),
        )
        return JsonResponse({
            'success': True,
            'message': 'Template created successfully',
            'template': _template_to_dict(template),
        }, status=201)
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_GET
def invoice_template_active(request):
    try:
        template = _store(request).get_active_template()
        if template is None:
            raise NotFoundError("No active invoice template")
        return JsonResponse({'success': True, 'template': _template_to_dict(template)})
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_http_methods(["GET", "PUT", "DELETE"])
def invoice_template_detail(request, template_id):
    """Get, replace or delete one template."""
    try:
        store = _store(request)

        if request.method == 'GET':
            template = store.get_by_id(template_id)
            return JsonResponse({'success': True, 'template': _template_to_dict(template)})

        if request.method == 'DELETE':
            store.delete(template_id)
            return JsonResponse({'success': True, 'message': 'Template deleted successfully'})

        template = store.update(template_id, **_template_kwargs(_parse_body(request)))
        return JsonResponse({
            'success': True,
            'message': 'Template updated successfully',
            'template': _template_to_dict(template),
        })
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_POST
def invoice_template_activate(request, template_id):
    try:
        template = _store(request).set_active(template_id)
        return JsonResponse({
            'success': True,
            'message': 'Template activated successfully',
            'template': _template_to_dict(template, include_schema=False),
        })
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_POST
def invoice_template_duplicate(request, template_id):
    try:
        data = _parse_body(request)
        template = _store(request).duplicate(
            template_id, data.get('name', ''), created_by=request.user
        )
        return JsonResponse({
            'success': True,
            'message': 'Template duplicated successfully',
            'template': _template_to_dict(template),
        }, status=201)
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_POST
def invoice_template_preview_schema(request):
    """Preview an unsaved schema with the sample sale."""
    try:
        data = _parse_body(request)
        schema = data.get('schema', data)
        branch_id = _int_param(request, 'branch')
        branch = BranchProvider().get_branch_info(branch_id) if branch_id is not None else None
        html = InvoiceRenderingEngine().render_preview(schema, branch)
        return HttpResponse(html, content_type='text/html; charset=utf-8')
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_GET
def invoice_template_preview(request, template_id):
    """Preview a stored template with the sample sale."""
    try:
        store = _store(request)
        template = store.get_by_id(template_id)
        html = InvoiceRenderingEngine().render_preview(
            template_schema(template), branch_to_dto(store.branch)
        )
        return HttpResponse(html, content_type='text/html; charset=utf-8')
    except InvoicingError as e:
        return _error_response(e)


def _render_sale(request, sale_id) -> tuple[str, str]:
    """Render a stored sale with its branch's active (or the requested) template."""
    sale = SaleProvider().get_sale(sale_id)
    store = TemplateStore(sale.branch)

    template_id = _int_param(request, 'template')
    if template_id is not None:
        template = store.get_by_id(template_id)
    else:
        template = store.get_active_template()
        if template is None:
            raise NotFoundError(f"No active invoice template for branch {sale.branch.code}")

    html = InvoiceRenderingEngine().render_invoice(
        template_schema(template), sale_to_dto(sale), branch_to_dto(sale.branch)
    )
    return html, sale.invoice_number


@login_required
@require_GET
def sale_invoice(request, sale_id):
    try:
        html, _ = _render_sale(request, sale_id)
        return HttpResponse(html, content_type='text/html; charset=utf-8')
    except InvoicingError as e:
        return _error_response(e)


@login_required
@require_GET
def sale_invoice_pdf(request, sale_id):
    try:
        html, invoice_number = _render_sale(request, sale_id)
    except InvoicingError as e:
        return _error_response(e)

    try:
        result = PdfRenderService().render(html, filename=f"{invoice_number}.pdf")
    except Exception as e:
        logger.error(f"PDF generation failed for sale {sale_id}: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': 'PDF generation failed'}, status=500)

    response = HttpResponse(result.pdf_bytes, content_type=result.content_type)
    response['Content-Disposition'] = result.content_disposition
    return response


@login_required
@require_GET
def sale_compliance_qr(request, sale_id):
    """Compliance QR payload for a sale, with its decoded fields."""
    try:
        sale = SaleProvider().get_sale(sale_id)
        payload = InvoiceRenderingEngine().generate_compliance_qr(
            sale_to_dto(sale), branch_to_dto(sale.branch)
        )
    except InvoicingError as e:
        return _error_response(e)

    fields = []
    for field in decode_payload(payload):
        tag = ComplianceTag(field.tag)
        fields.append({
            'tag': field.tag,
            'name': tag.name.lower(),
            'value': field.value.hex() if tag == ComplianceTag.INVOICE_HASH else field.value.decode('utf-8'),
        })

    return JsonResponse({'success': True, 'payload': payload, 'fields': fields})
