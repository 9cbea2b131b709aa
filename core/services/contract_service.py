"""
Contract Service - Handles contract creation, listing and export business logic
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from django.utils.html import escape

from apps.accounts.plans import can_create_contract, can_download_pdf
from apps.contracts.wizard import ContractDraft, ContractWizard, generate_preview, generate_title
from core.exceptions import IncompleteDraft, NotAuthenticated, PlanLimitReached
from core.file_utils import get_secure_filename, render_text_to_pdf
from core.helpers import preview_to_html
from core.services.contract_repository import ContractRepository

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_RECENT = "recent"
FILTERS = {
    FILTER_ALL: "Todos",
    FILTER_RECENT: "Recentes",
}


def is_recent(contract, now=None, window_days=None):
    """Whether `contract` was created within the trailing window (inclusive)"""
    if window_days is None:
        window_days = getattr(settings, 'RECENT_WINDOW_DAYS', 7)
    now = now or timezone.now()
    return now - contract.created_at <= timedelta(days=window_days)


def filter_contracts(contracts, filter_name=FILTER_ALL, now=None):
    """Filter an already fetched list of contracts"""
    if filter_name == FILTER_RECENT:
        now = now or timezone.now()
        return [c for c in contracts if is_recent(c, now)]
    return list(contracts)


class ContractService:
    """Service for contract operations on behalf of the current session"""

    def __init__(self, repository=None):
        self.repository = repository or ContractRepository()

    def finish(self, session_store, draft):
        """Persist a completed draft and refresh the usage count.

        Raises NotAuthenticated, PlanLimitReached, IncompleteDraft or
        PersistenceError. The draft object is never modified.
        """
        identity = session_store.identity
        if identity is None:
            raise NotAuthenticated("Usuário não autenticado.")
        if not can_create_contract(identity.plan, identity.contracts_used):
            raise PlanLimitReached("Limite de contratos atingido.")
        if not ContractWizard(draft).is_complete():
            raise IncompleteDraft("Preencha os campos obrigatórios.")

        contract = self.repository.insert(identity.id, generate_title(draft), draft.to_payload())
        session_store.refresh_usage()
        return contract

    def list_contracts(self, session_store, filter_name=FILTER_ALL, now=None):
        identity = session_store.identity
        if identity is None:
            raise NotAuthenticated("Usuário não autenticado.")
        contracts = self.repository.list_by_owner(identity.id)
        return filter_contracts(contracts, filter_name, now)

    def get_contract(self, session_store, contract_id):
        identity = session_store.identity
        if identity is None:
            raise NotAuthenticated("Usuário não autenticado.")
        return self.repository.get_for_owner(contract_id, identity.id)

    def delete_contract(self, session_store, contract):
        """Delete one of the session user's contracts and refresh the usage count"""
        deleted = self.repository.delete_by_id(contract.pk)
        session_store.refresh_usage()
        return deleted

    def get_stats(self, contracts, identity, now=None):
        """Figures for the dashboard stat cards"""
        now = now or timezone.now()
        return {
            'total': len(contracts),
            'recent': sum(1 for c in contracts if is_recent(c, now)),
            'plan_name': identity.plan_name,
            'plan_limit_text': identity.plan_limit_text,
        }

    def render_preview(self, contract):
        return generate_preview(ContractDraft.from_payload(contract.data_json))

    def export_html(self, contract):
        """Return (filename, html) for a persisted contract"""
        body = preview_to_html(self.render_preview(contract))
        document = (
            "<!DOCTYPE html>\n<html lang=\"pt-br\">\n<head>\n<meta charset=\"utf-8\">\n"
            f"<title>{escape(contract.title)}</title>\n</head>\n<body>\n{body}</body>\n</html>\n"
        )
        return get_secure_filename(contract.title, 'html'), document

    def export_pdf(self, contract, identity):
        """Return (filename, pdf bytes); paid plans only"""
        if not can_download_pdf(identity.plan):
            raise PlanLimitReached("Download de PDF disponível apenas nos planos pagos.")
        pdf_bytes = render_text_to_pdf(self.render_preview(contract), title=contract.title)
        logger.info(f"Rendered PDF for contract {contract.pk} ({len(pdf_bytes)} bytes)")
        return get_secure_filename(contract.title, 'pdf'), pdf_bytes
