"""
API Views - JSON endpoints for contract types, plans, previews and contracts
"""
import json
import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.accounts.plans import get_all_plans
from apps.contracts.contract_types import ContractType
from apps.contracts.wizard import ContractDraft, ContractWizard, LAST_STEP
from core.exceptions import PersistenceError
from core.services.contract_service import FILTER_ALL, FILTERS, ContractService

logger = logging.getLogger(__name__)

contract_service = ContractService()


def api_login_required(view):
    """Reject anonymous requests with a JSON 401 instead of a redirect"""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if request.session_store.identity is None:
            return JsonResponse({'status': 'error', 'message': 'Authentication required'}, status=401)
        return view(request, *args, **kwargs)
    return wrapper


@require_http_methods(["GET"])
def health_check(request):
    """API health check"""
    return JsonResponse({
        'status': 'healthy',
        'service': 'ContratoPronto Django API',
        'version': '1.0.0'
    })


@require_http_methods(["GET"])
def contract_types(request):
    """Get all available contract types"""
    return JsonResponse({
        'status': 'success',
        'contract_types': ContractType.get_all_types()
    })


@require_http_methods(["GET"])
def plans(request):
    """Get the plan table"""
    return JsonResponse({
        'status': 'success',
        'plans': get_all_plans()
    })


@csrf_exempt
@require_http_methods(["POST"])
def preview(request):
    """Render the preview and title for a draft, with per-step validity"""
    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({'status': 'error', 'message': 'Invalid JSON'}, status=400)

    if not isinstance(data, dict):
        return JsonResponse({'status': 'error', 'message': 'Expected a JSON object'}, status=400)

    fields = data.get('draft', data)
    draft = ContractDraft.from_dict(fields if isinstance(fields, dict) else {})
    steps = {
        str(step): ContractWizard(draft, step).can_proceed()
        for step in range(1, LAST_STEP + 1)
    }

    wizard = ContractWizard(draft)
    return JsonResponse({
        'status': 'success',
        'title': wizard.title(),
        'preview': wizard.preview(),
        'can_proceed': steps,
    })


@require_http_methods(["GET"])
@api_login_required
def contracts(request):
    """List the signed-in user's contracts with derived display fields"""
    filter_name = request.GET.get('filter', FILTER_ALL)
    if filter_name not in FILTERS:
        filter_name = FILTER_ALL

    try:
        items = contract_service.list_contracts(request.session_store, filter_name)
    except PersistenceError as e:
        logger.error(f"API error listing contracts: {e}")
        return JsonResponse({'status': 'error', 'message': 'Could not load contracts'}, status=500)

    return JsonResponse({
        'status': 'success',
        'filter': filter_name,
        'contracts': [
            {
                'id': c.pk,
                'title': c.title,
                'created_at': c.created_at.isoformat(),
                'pdf_url': c.pdf_url,
                **c.payload.as_display_dict(),
            }
            for c in items
        ]
    })


@require_http_methods(["GET"])
@api_login_required
def plan_status(request):
    """Plan tier, usage and whether a new contract may be created"""
    identity = request.session_store.identity
    return JsonResponse({
        'status': 'success',
        'plan': identity.plan,
        'plan_name': identity.plan_name,
        'contracts_used': identity.contracts_used,
        'limit_text': identity.plan_limit_text,
        'can_create_contract': identity.can_create_contract,
    })
