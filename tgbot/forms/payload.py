"""
Turns a validated lead into what the spreadsheet webhook receives.
"""

from typing import Any, Dict, List, Tuple

from tgbot.forms.schema import LeadFormValues

SOURCE = "Landing CoopHub"
MESSAGE = "Cadastro lista de espera CoopHub"

# Python field name -> column name the spreadsheet script reads
WIRE_KEYS: Dict[str, str] = {
    "name": "nome",
    "email": "email",
    "organization_size": "porte",
    "sector": "setor",
    "sector_other": "setorOutro",
    "member_count_approx": "numCooperados",
    "implementation_timeline": "tempoImplantacao",
    "accepts_beta_program": "aceitaBeta",
    "price_range": "faixaPreco",
    "goals": "objetivos",
    "goals_other": "objetivoOutro",
    "pain_points": "problemas",
    "pain_points_other": "problemaOutro",
    "pain_points_free_text": "problemasLivre",
    "modules_of_interest": "modulos",
    "integrations_needed": "integracoes",
    "previous_attempts": "tentou",
    "consent_given": "consent",
}

# Free-text companions that are sent only when they hold something
TRIMMED_OPTIONAL_FIELDS = (
    "sector_other",
    "goals_other",
    "pain_points_other",
    "integrations_needed",
    "pain_points_free_text",
)


def build_payload(values: LeadFormValues) -> Dict[str, Any]:
    data = values.model_dump()
    payload: Dict[str, Any] = {}

    for field_name, wire_key in WIRE_KEYS.items():
        value = data[field_name]
        if field_name in TRIMMED_OPTIONAL_FIELDS:
            value = (value or "").strip()
            if not value:
                continue
        payload[wire_key] = value

    payload["message"] = MESSAGE
    # contact keys older versions of the sheet script read; "email" keeps its place
    payload["name"] = values.name
    payload["email"] = values.email
    payload["_source"] = SOURCE
    return payload


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_form_pairs(payload: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Flatten the payload into form fields; lists repeat their key."""
    pairs: List[Tuple[str, str]] = []
    for key, value in payload.items():
        if isinstance(value, (list, tuple, set)):
            for item in value:
                pairs.append((key, _as_text(item)))
        else:
            pairs.append((key, _as_text(value)))
    return pairs
