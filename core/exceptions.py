"""
Exceptions raised by the core services
"""


class ContractServiceError(Exception):
    """Base class for contract service failures"""


class PersistenceError(ContractServiceError):
    """The contracts table could not be read or written"""


class PlanLimitReached(ContractServiceError):
    """The current plan does not allow creating another contract"""


class NotAuthenticated(ContractServiceError):
    """The operation needs a signed-in user"""


class IncompleteDraft(ContractServiceError):
    """A required wizard field is empty"""
