"""
Contract Views - Landing page, contract wizard, dashboard and exports
"""
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from apps.accounts.plans import get_all_plans
from apps.contracts.contract_types import ContractType
from apps.contracts.wizard import STEPS, ContractWizard
from core.exceptions import PersistenceError, PlanLimitReached
from core.services.contract_service import (
    FILTER_ALL,
    FILTERS,
    ContractService,
    filter_contracts,
)

logger = logging.getLogger(__name__)

WIZARD_SESSION_PREFIX = 'contract_wizard'

SAMPLE_CONTRACT = """CONTRATO DE PRESTAÇÃO DE SERVIÇOS

CONTRATANTE: João Silva - ME
CNPJ: 12.345.678/0001-90
Endereço: Rua das Flores, 123 - São Paulo/SP

CONTRATADO: Maria Santos Design
CPF: 123.456.789-00
Endereço: Av. Paulista, 456 - São Paulo/SP

OBJETO: Desenvolvimento de identidade visual completa incluindo logotipo, cartão de visita e material promocional para empresa.

VALOR: R$ 2.500,00
FORMA DE PAGAMENTO: 50% no início, 50% na entrega
PRAZO: 15 dias corridos

LOCAL E DATA: São Paulo, 15 de Janeiro de 2024

CLÁUSULAS ESPECIAIS:
✓ Multa por cancelamento: 30% do valor total
✓ Multa por atraso: 2% ao dia
✓ Cláusula de confidencialidade incluída
✓ Assinatura digital habilitada"""

DEMO_STEPS = [
    {
        "title": "Escolha o Tipo de Contrato",
        "description": "Selecione entre diversos tipos de contratos disponíveis",
        "details": "Prestação de Serviço, Aluguel, Venda, Consultoria, Freelance e muito mais!",
    },
    {
        "title": "Preencha os Dados",
        "description": "Formulário inteligente guia você passo a passo",
        "details": "Dados das partes, valores, prazos e condições específicas do seu contrato",
    },
    {
        "title": "Adicione Cláusulas de Proteção",
        "description": "Torne seu contrato mais seguro com cláusulas especiais",
        "details": "Multas por cancelamento, atraso, confidencialidade e assinatura digital",
    },
    {
        "title": "Contrato Pronto!",
        "description": "PDF profissional gerado automaticamente",
        "details": "Documento pronto para assinatura e uso",
    },
]


contract_service = ContractService()


def index(request):
    """Landing page with the plan table"""
    return render(request, 'index.html', {'plans': get_all_plans()})


def demo(request):
    """Walkthrough of the wizard with a sample contract"""
    try:
        step = int(request.GET.get('step', 1))
    except ValueError:
        step = 1
    step = min(max(step, 1), len(DEMO_STEPS))
    return render(request, 'demo.html', {
        'demo_steps': DEMO_STEPS,
        'current_step': step,
        'current': DEMO_STEPS[step - 1],
        'sample_contract': SAMPLE_CONTRACT,
    })


def wizard_session_key(user_id):
    """Session key holding one user's wizard draft"""
    return f"{WIZARD_SESSION_PREFIX}:{user_id}"


def _load_wizard(request):
    key = wizard_session_key(request.session_store.identity.id)
    return ContractWizard.from_state(request.session.get(key))


def _save_wizard(request, wizard):
    key = wizard_session_key(request.session_store.identity.id)
    request.session[key] = wizard.to_state()


@login_required
@require_http_methods(["GET", "POST"])
def create_contract(request):
    """Four step contract wizard.

    Every POST applies the submitted fields to the draft, then performs
    `action` (next, back, update or finish).
    """
    store = request.session_store
    identity = store.identity

    if not identity.can_create_contract:
        return render(request, 'contracts/limit_reached.html')

    wizard = _load_wizard(request)

    if request.method == 'POST':
        action = request.POST.get('action', 'update')
        wizard.draft.update(request.POST)

        if action == 'next':
            wizard.next()
        elif action == 'back':
            wizard.back()
        elif action == 'finish' and wizard.is_last_step:
            missing_step = wizard.first_incomplete_step()
            if missing_step is not None:
                wizard.step = missing_step
                _save_wizard(request, wizard)
                return redirect('contracts:create')

            try:
                contract = contract_service.finish(store, wizard.draft)
            except PlanLimitReached:
                _save_wizard(request, wizard)
                return render(request, 'contracts/limit_reached.html')
            except PersistenceError as e:
                logger.error(f"Error saving contract for user {identity.id}: {e}")
                messages.error(request, 'Ocorreu um erro ao salvar o contrato. Tente novamente.')
                _save_wizard(request, wizard)
                return redirect('contracts:create')

            request.session.pop(wizard_session_key(identity.id), None)
            logger.info(f"Wizard finished, contract {contract.pk} saved for user {identity.id}")
            messages.success(request, 'Contrato criado com sucesso! Seu contrato foi salvo e está disponível no dashboard.')
            return redirect('contracts:dashboard')

        _save_wizard(request, wizard)
        return redirect('contracts:create')

    return render(request, 'contracts/create.html', {
        'wizard': wizard,
        'draft': wizard.draft,
        'steps': STEPS,
        'current_step': wizard.current_step,
        'can_proceed': wizard.can_proceed(),
        'preview': wizard.preview(),
        'contract_types': ContractType.labels(),
    })


@login_required
def dashboard(request):
    """List the user's contracts with stat cards and filters"""
    store = request.session_store
    identity = store.identity

    filter_name = request.GET.get('filter', FILTER_ALL)
    if filter_name not in FILTERS:
        filter_name = FILTER_ALL

    try:
        contracts = contract_service.list_contracts(store)
    except PersistenceError as e:
        logger.error(f"Error loading dashboard for user {identity.id}: {e}")
        messages.error(request, 'Não foi possível carregar seus contratos.')
        contracts = []

    return render(request, 'contracts/dashboard.html', {
        'contracts': filter_contracts(contracts, filter_name),
        'stats': contract_service.get_stats(contracts, identity),
        'filters': FILTERS,
        'current_filter': filter_name,
        'can_create_contract': identity.can_create_contract,
    })


def _get_owned_contract(request, contract_id):
    try:
        contract = contract_service.get_contract(request.session_store, contract_id)
    except PersistenceError:
        contract = None
    if contract is None:
        raise Http404("Contrato não encontrado")
    return contract


@login_required
@require_http_methods(["GET", "POST"])
def delete_contract(request, contract_id):
    """GET asks for confirmation, POST deletes"""
    contract = _get_owned_contract(request, contract_id)

    if request.method == 'GET':
        return render(request, 'contracts/confirm_delete.html', {'contract': contract})

    try:
        contract_service.delete_contract(request.session_store, contract)
    except PersistenceError as e:
        logger.error(f"Error deleting contract {contract_id}: {e}")
        messages.error(request, 'Ocorreu um erro ao excluir o contrato. Tente novamente.')
        return redirect('contracts:dashboard')

    messages.success(request, 'Contrato excluído.')
    return redirect('contracts:dashboard')


@login_required
@require_http_methods(["GET"])
def download_html(request, contract_id):
    """Download the contract as an HTML document"""
    contract = _get_owned_contract(request, contract_id)
    filename, document = contract_service.export_html(contract)

    response = HttpResponse(document, content_type='text/html; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@login_required
@require_http_methods(["GET"])
def download_pdf(request, contract_id):
    """Download the contract as PDF (paid plans)"""
    contract = _get_owned_contract(request, contract_id)

    try:
        filename, pdf_bytes = contract_service.export_pdf(contract, request.session_store.identity)
    except PlanLimitReached as e:
        messages.warning(request, str(e))
        return redirect('contracts:dashboard')

    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
