"""
Contract Type Definitions
"""
from enum import Enum


class ContractType(Enum):
    """Available contract types in the system.

    The value is the label stored in the contract payload.
    """
    SERVICE_AGREEMENT = "Prestação de Serviço"
    RENTAL = "Aluguel"
    SALE = "Venda"
    CONSULTING = "Consultoria"
    FREELANCE = "Freelance"
    PARTNERSHIP = "Parceria"
    LICENSING = "Licenciamento"
    OTHER = "Outros"

    @classmethod
    def is_valid(cls, label):
        return label in cls.labels()

    @classmethod
    def labels(cls):
        return [contract_type.value for contract_type in cls]

    @classmethod
    def get_all_types(cls):
        """Get all available contract types"""
        return [
            {
                "value": contract_type.value,
                "label": contract_type.value,
                "key": contract_type.name.lower(),
            }
            for contract_type in cls
        ]
