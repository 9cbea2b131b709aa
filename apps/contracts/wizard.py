"""
Contract Wizard - Draft contract data and the four step form state machine
"""
from dataclasses import dataclass, fields, asdict


PLACEHOLDER = "A definir"

FIRST_STEP = 1
LAST_STEP = 4

STEPS = [
    {"number": 1, "title": "Dados das Partes"},
    {"number": 2, "title": "Detalhes do Contrato"},
    {"number": 3, "title": "Cláusulas Especiais"},
    {"number": 4, "title": "Revisão Final"},
]

# Persisted payload keys, kept in the camelCase shape stored in data_json
PAYLOAD_KEYS = {
    "contractor_name": "contractorName",
    "contractor_document": "contractorDocument",
    "contractor_address": "contractorAddress",
    "contracted_name": "contractedName",
    "contracted_document": "contractedDocument",
    "contracted_address": "contractedAddress",
    "contract_type": "contractType",
    "contract_object": "contractObject",
    "value": "value",
    "payment_method": "paymentMethod",
    "duration": "duration",
    "location": "location",
    "date": "date",
    "cancellation_fine": "cancellationFine",
    "cancellation_fine_value": "cancellationFineValue",
    "delay_fine": "delayFine",
    "delay_fine_value": "delayFineValue",
    "confidentiality": "confidentiality",
    "online_signature": "onlineSignature",
}


@dataclass
class ContractDraft:
    """In-progress contract data held by the wizard"""
    contractor_name: str = ""
    contractor_document: str = ""
    contractor_address: str = ""
    contracted_name: str = ""
    contracted_document: str = ""
    contracted_address: str = ""
    contract_type: str = ""
    contract_object: str = ""
    value: str = ""
    payment_method: str = ""
    duration: str = ""
    location: str = ""
    date: str = ""
    cancellation_fine: bool = False
    cancellation_fine_value: str = ""
    delay_fine: bool = False
    delay_fine_value: str = ""
    confidentiality: bool = False
    online_signature: bool = False

    @classmethod
    def boolean_fields(cls):
        return [f.name for f in fields(cls) if f.type in (bool, "bool")]

    @classmethod
    def text_fields(cls):
        return [f.name for f in fields(cls) if f.type in (str, "str")]

    def update(self, data):
        """Apply submitted field values.

        Only keys present in `data` are touched, so a partial submission (one
        wizard step) leaves the other fields alone. `data` may be a plain dict
        or a Django QueryDict.
        """
        for name in self.text_fields():
            if name in data:
                raw = data.get(name)
                setattr(self, name, "" if raw is None else str(raw))
        for name in self.boolean_fields():
            if name in data:
                setattr(self, name, _as_bool(data.get(name)))

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        draft = cls()
        if data:
            draft.update(data)
        return draft

    def to_payload(self):
        """Shape stored in the contract's JSON column"""
        return {PAYLOAD_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_payload(cls, payload):
        payload = payload if isinstance(payload, dict) else {}
        data = {}
        for name, key in PAYLOAD_KEYS.items():
            if key in payload:
                data[name] = payload[key]
        return cls.from_dict(data)


def _as_bool(raw):
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in ("1", "true", "on", "yes")


class ContractWizard:
    """Linear four step form.

    Forward moves are gated on the current step's required fields; moves are
    always one step at a time and clamped to [1, 4].
    """

    REQUIRED_FIELDS = {
        1: ("contractor_name", "contracted_name"),
        2: ("contract_type", "contract_object", "value"),
        3: (),
        4: (),
    }

    def __init__(self, draft=None, step=FIRST_STEP):
        self.draft = draft if draft is not None else ContractDraft()
        self.step = min(max(int(step), FIRST_STEP), LAST_STEP)

    def can_proceed(self):
        required = self.REQUIRED_FIELDS.get(self.step)
        if required is None:
            return False
        return all(getattr(self.draft, name) for name in required)

    def next(self):
        """Advance one step; returns True when the step changed"""
        if self.can_proceed() and self.step < LAST_STEP:
            self.step += 1
            return True
        return False

    def back(self):
        """Go back one step; returns True when the step changed"""
        if self.step > FIRST_STEP:
            self.step -= 1
            return True
        return False

    def first_incomplete_step(self):
        """Earliest step whose required fields are missing, or None"""
        for step in range(FIRST_STEP, LAST_STEP + 1):
            if not ContractWizard(self.draft, step).can_proceed():
                return step
        return None

    def is_complete(self):
        return self.first_incomplete_step() is None

    @property
    def is_last_step(self):
        return self.step == LAST_STEP

    @property
    def current_step(self):
        return STEPS[self.step - 1]

    def preview(self):
        return generate_preview(self.draft)

    def title(self):
        return generate_title(self.draft)

    def to_state(self):
        """Serializable wizard state for the Django session"""
        return {"step": self.step, "draft": self.draft.to_dict()}

    @classmethod
    def from_state(cls, state):
        state = state or {}
        return cls(ContractDraft.from_dict(state.get("draft")), state.get("step", FIRST_STEP))


def generate_title(draft):
    """Title stored with the persisted contract"""
    contract_type = draft.contract_type or "Contrato"
    contractor = draft.contractor_name or "Parte 1"
    contracted = draft.contracted_name or "Parte 2"
    return f"{contract_type} - {contractor} e {contracted}"


def generate_preview(draft):
    """Render the contract preview text for a draft"""
    lines = [
        f"CONTRATO DE {draft.contract_type.upper()}",
        "",
        f"CONTRATANTE: {draft.contractor_name}",
        f"CONTRATADO: {draft.contracted_name}",
        "",
        f"OBJETO: {draft.contract_object}",
        "",
        f"VALOR: {draft.value}",
        f"FORMA DE PAGAMENTO: {draft.payment_method or PLACEHOLDER}",
        f"DURAÇÃO: {draft.duration or PLACEHOLDER}",
        "",
        f"LOCAL E DATA: {draft.location or PLACEHOLDER}, {draft.date or PLACEHOLDER}",
    ]

    clauses = []
    if draft.cancellation_fine:
        clauses.append(f"MULTA POR CANCELAMENTO: {draft.cancellation_fine_value}")
    if draft.delay_fine:
        clauses.append(f"MULTA POR ATRASO: {draft.delay_fine_value}")
    if draft.confidentiality:
        clauses.append("CLÁUSULA DE CONFIDENCIALIDADE: Incluída")
    if draft.online_signature:
        clauses.append("ASSINATURA ONLINE: Habilitada")

    if clauses:
        lines.append("")
        lines.extend(clauses)

    return "\n".join(lines)
