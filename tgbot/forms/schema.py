"""
Validation schema for the waiting-list form.

``validate`` takes whatever the form currently holds (possibly partial or
badly typed) and returns either the typed ``LeadFormValues`` or a mapping of
field name to a message that can be shown next to that field.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from tgbot.forms.options import BETA_PROGRAM_OPTIONS
from tgbot.utils.validators import has_min_length, is_empty_or_whitespace, is_valid_email

LEAD_FORM_ERROR = "lead_form"

FIELD_MESSAGES: Dict[str, str] = {
    "name": "Informe seu nome",
    "email": "E-mail inválido",
    "organization_size": "Selecione o porte",
    "sector": "Informe o setor",
    "implementation_timeline": "Selecione um prazo",
    "accepts_beta_program": "Selecione uma opção",
    "price_range": "Selecione uma faixa",
    "goals": "Selecione ao menos um objetivo",
    "pain_points": "Selecione ao menos um problema",
    "modules_of_interest": "Selecione ao menos um módulo",
    "previous_attempts": "Conte um pouco do que já tentou",
    "consent_given": "É necessário aceitar o consentimento",
}
INVALID_VALUE_MESSAGE = "Valor inválido"

REQUIRED_SELECTS = ("organization_size", "sector", "implementation_timeline", "price_range")
MULTI_SELECTS = ("goals", "pain_points", "modules_of_interest")


def _fail(field_name: str) -> PydanticCustomError:
    return PydanticCustomError(LEAD_FORM_ERROR, FIELD_MESSAGES[field_name])


class LeadFormValues(BaseModel):
    """A waiting-list lead that passed every field rule."""

    model_config = ConfigDict(extra="ignore", validate_default=True)

    name: str = ""
    email: str = ""
    organization_size: str = ""
    sector: str = ""
    sector_other: Optional[str] = None
    member_count_approx: Optional[str] = None
    implementation_timeline: str = ""
    accepts_beta_program: str = "Sim"
    price_range: str = ""
    goals: List[str] = Field(default_factory=list)
    goals_other: Optional[str] = None
    pain_points: List[str] = Field(default_factory=list)
    pain_points_other: Optional[str] = None
    pain_points_free_text: Optional[str] = None
    modules_of_interest: List[str] = Field(default_factory=list)
    integrations_needed: Optional[str] = None
    previous_attempts: str = ""
    consent_given: bool = False

    @field_validator("name")
    @classmethod
    def name_has_two_characters(cls, value: str) -> str:
        if not has_min_length(value, 2):
            raise _fail("name")
        return value

    @field_validator("email")
    @classmethod
    def email_is_well_formed(cls, value: str) -> str:
        if not is_valid_email(value):
            raise _fail("email")
        return value

    @field_validator(*REQUIRED_SELECTS)
    @classmethod
    def option_is_selected(cls, value: str, info: ValidationInfo) -> str:
        if is_empty_or_whitespace(value):
            raise _fail(info.field_name)
        return value

    @field_validator("accepts_beta_program")
    @classmethod
    def beta_choice_is_known(cls, value: str) -> str:
        if value not in BETA_PROGRAM_OPTIONS:
            raise _fail("accepts_beta_program")
        return value

    @field_validator(*MULTI_SELECTS)
    @classmethod
    def at_least_one_selected(cls, value: List[str], info: ValidationInfo) -> List[str]:
        if not value:
            raise _fail(info.field_name)
        return value

    @field_validator("previous_attempts")
    @classmethod
    def previous_attempts_is_described(cls, value: str) -> str:
        if not has_min_length(value, 5):
            raise _fail("previous_attempts")
        return value

    @field_validator("consent_given", mode="before")
    @classmethod
    def consent_is_true(cls, value: Any) -> bool:
        # strict identity: "true", 1 and friends are not consent
        if value is not True:
            raise _fail("consent_given")
        return value


def _message_for(error: Dict[str, Any]) -> str:
    if error["type"] == LEAD_FORM_ERROR:
        return error["msg"]
    field_name = error["loc"][0] if error["loc"] else ""
    return FIELD_MESSAGES.get(field_name, INVALID_VALUE_MESSAGE)


def validate(
    candidate: Mapping[str, Any],
) -> Tuple[Optional[LeadFormValues], Dict[str, str]]:
    """Validate a candidate form.

    Returns ``(values, {})`` on success and ``(None, errors)`` otherwise, where
    ``errors`` holds one message per failing field.
    """
    try:
        return LeadFormValues.model_validate(dict(candidate)), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field_name, _message_for(error))
        return None, errors


def validate_field(values: Mapping[str, Any], field_name: str) -> Optional[str]:
    """Return the error message of one field, or None if it passes."""
    _, errors = validate(values)
    return errors.get(field_name)
