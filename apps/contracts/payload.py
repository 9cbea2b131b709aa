"""
Typed read access to the JSON payload stored with a contract
"""
NOT_INFORMED = "Não informado"


class ContractPayload:
    """Read-only view over a contract's `data_json`.

    Every accessor falls back to NOT_INFORMED on its own when its key is
    missing, empty or not a string, so a partial payload still renders.
    """

    def __init__(self, data):
        self._data = data if isinstance(data, dict) else {}

    def _text(self, key, default=NOT_INFORMED):
        value = self._data.get(key)
        if isinstance(value, str) and value:
            return value
        return default

    @property
    def contract_type(self):
        return self._text("contractType")

    @property
    def value(self):
        return self._text("value")

    @property
    def contractor_name(self):
        return self._text("contractorName")

    @property
    def contracted_name(self):
        return self._text("contractedName")

    @property
    def parties(self):
        return {
            "contractor": self.contractor_name,
            "contracted": self.contracted_name,
        }

    def as_display_dict(self):
        return {
            "type": self.contract_type,
            "value": self.value,
            "parties": self.parties,
        }
