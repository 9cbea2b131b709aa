"""
Plan Definitions - Plan tiers, limits and the contract creation gate
"""
from enum import Enum


class PlanTier(Enum):
    """Available plan tiers, ordered from cheapest to most expensive"""
    FREE = "free"
    STANDARD = "standard"
    PROFESSIONAL = "professional"

    @classmethod
    def get_display_name(cls, plan):
        """Get display name for a plan tier (accepts the enum or its value)"""
        names = {
            cls.FREE: "Gratuito",
            cls.STANDARD: "Padrão",
            cls.PROFESSIONAL: "Profissional",
        }
        tier = cls.from_value(plan)
        if tier is None:
            return ""
        return names[tier]

    @classmethod
    def from_value(cls, plan):
        """Resolve a plan tier, returning None for unknown values"""
        if isinstance(plan, cls):
            return plan
        try:
            return cls(plan)
        except ValueError:
            return None

    @classmethod
    def choices(cls):
        return [(tier.value, cls.get_display_name(tier)) for tier in cls]


PLAN_CONFIGS = {
    PlanTier.FREE.value: {
        "label": "Gratuito",
        "price": "R$ 0",
        "period": "/mês",
        # None means unlimited
        "contract_limit": 1,
        "pdf_download": False,
        "features": [
            "1 contrato por mês",
            "Marca d'água incluída",
            "Formulário básico",
            "Suporte por email",
        ],
        "limitations": ["Sem download de PDF", "Funcionalidades limitadas"],
        "button_text": "Começar Grátis",
        "popular": False,
    },

    PlanTier.STANDARD.value: {
        "label": "Padrão",
        "price": "R$ 19",
        "period": "/mês",
        "contract_limit": 10,
        "pdf_download": True,
        "features": [
            "Até 10 contratos por mês",
            "PDF profissional sem marca d'água",
            "Download habilitado",
            "Todas as cláusulas básicas",
            "Suporte prioritário",
        ],
        "limitations": [],
        "button_text": "Assinar Padrão",
        "popular": True,
    },

    PlanTier.PROFESSIONAL.value: {
        "label": "Profissional",
        "price": "R$ 39",
        "period": "/mês",
        "contract_limit": None,
        "pdf_download": True,
        "features": [
            "Contratos ilimitados",
            "Cláusulas personalizadas premium",
            "Assinatura online",
            "Histórico completo",
            "Suporte 24/7",
            "API de integração",
        ],
        "limitations": [],
        "button_text": "Assinar Profissional",
        "popular": False,
    },
}


def get_plan_config(plan):
    """Get configuration for a plan tier, or None when the tier is unknown"""
    tier = PlanTier.from_value(plan)
    if tier is None:
        return None
    return PLAN_CONFIGS[tier.value]


def can_create_contract(plan, contracts_used):
    """Whether a user on `plan` with `contracts_used` saved contracts may create another.

    Unknown plans are denied. On a limited plan an unknown count (None) is
    denied as well.
    """
    config = get_plan_config(plan)
    if config is None:
        return False
    limit = config["contract_limit"]
    if limit is None:
        return True
    if contracts_used is None:
        return False
    return contracts_used < limit


def plan_limit_text(plan, contracts_used):
    """Human readable usage summary shown on the dashboard"""
    config = get_plan_config(plan)
    if config is None:
        return ""
    limit = config["contract_limit"]
    if limit is None:
        return "Contratos ilimitados"
    if contracts_used is None:
        return f"?/{limit} contratos usados"
    return f"{contracts_used}/{limit} contratos usados"


def can_download_pdf(plan):
    config = get_plan_config(plan)
    return bool(config and config["pdf_download"])


def get_all_plans():
    """Get all plans in display order"""
    return [
        {"value": tier.value, **PLAN_CONFIGS[tier.value]}
        for tier in PlanTier
    ]
