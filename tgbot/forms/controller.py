"""
Form controller for the waiting-list lead.

Holds the values being edited, the per-field error map and the submission
state, and runs the submit pipeline: validate, build the payload, post it
once, then reset on success or keep everything on failure.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from infrastructure.sheets.api import WEBHOOK_FAILURE_MESSAGE
from tgbot.forms.options import FIELDS_BY_NAME, FieldKind
from tgbot.forms.payload import build_payload, to_form_pairs
from tgbot.forms.schema import validate, validate_field

logger = logging.getLogger(__name__)


class LeadWebhook(Protocol):
    async def post_lead(self, pairs: List[Tuple[str, str]]) -> Any: ...


class UnknownFieldError(KeyError):
    pass


class UnknownOptionError(ValueError):
    pass


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    ERROR = "error"


@dataclass(frozen=True)
class SubmissionState:
    status: SubmissionStatus = SubmissionStatus.IDLE
    message: str = ""


def default_values() -> Dict[str, Any]:
    """A blank form: empty texts and selections, beta accepted, no consent."""
    values: Dict[str, Any] = {}
    for name, form_field in FIELDS_BY_NAME.items():
        if form_field.kind is FieldKind.MULTI:
            values[name] = []
        elif form_field.kind is FieldKind.CONSENT:
            values[name] = False
        else:
            values[name] = ""
    values["accepts_beta_program"] = "Sim"
    return values


def toggle_option(selected: Sequence[str], label: str) -> List[str]:
    """Add ``label`` if absent, remove it if present; keeps the order of the rest."""
    if label in selected:
        return [value for value in selected if value != label]
    return [*selected, label]


class LeadFormController:
    def __init__(self, webhook: Optional[LeadWebhook] = None):
        self.webhook = webhook
        self.values: Dict[str, Any] = default_values()
        self.errors: Dict[str, str] = {}
        self.state = SubmissionState()
        self._in_flight = False
        self._submit_attempted = False

    @property
    def submitting(self) -> bool:
        return self._in_flight

    def _field(self, name: str):
        try:
            return FIELDS_BY_NAME[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def _revalidate(self, name: str):
        message = validate_field(self.values, name)
        if message:
            self.errors[name] = message
        else:
            self.errors.pop(name, None)

    def set_value(self, name: str, value: Any):
        form_field = self._field(name)
        if form_field.kind is FieldKind.MULTI:
            unknown = [label for label in value if label not in form_field.options]
            if unknown:
                raise UnknownOptionError(f"{name}: {unknown!r}")
            value = list(dict.fromkeys(value))
        elif form_field.kind is FieldKind.SELECT and value not in form_field.options:
            raise UnknownOptionError(f"{name}: {value!r}")

        self.values[name] = value
        if self._submit_attempted or name in self.errors:
            self._revalidate(name)

    def toggle(self, name: str, label: str) -> List[str]:
        form_field = self._field(name)
        if form_field.kind is not FieldKind.MULTI:
            raise UnknownFieldError(name)
        if label not in form_field.options:
            raise UnknownOptionError(f"{name}: {label!r}")

        self.values[name] = toggle_option(self.values[name], label)
        self._revalidate(name)
        return self.values[name]

    def reset(self) -> bool:
        """Clear the form; refused while a submission is in flight."""
        if self._in_flight:
            logger.info("Reset ignored, a submission is in flight")
            return False
        self.values = default_values()
        self.errors = {}
        self.state = SubmissionState()
        self._submit_attempted = False
        return True

    async def submit(self) -> bool:
        """Validate and post the form once.

        Returns True when the lead was accepted and the form reset.
        """
        if self._in_flight:
            logger.info("Submit ignored, a submission is already in flight")
            return False

        self._submit_attempted = True
        values, errors = validate(self.values)
        self.errors = errors
        if values is None:
            logger.info("Lead form has invalid fields: %s", ", ".join(sorted(errors)))
            self.state = SubmissionState()
            return False

        self._in_flight = True
        self.state = SubmissionState(SubmissionStatus.SUBMITTING)
        try:
            payload = build_payload(values)
            if self.webhook is None:
                logger.debug("SHEETS_WEBHOOK is not set, lead not sent: %r", payload)
            else:
                await self.webhook.post_lead(to_form_pairs(payload))
        except Exception as e:
            logger.exception("Error submitting lead to the sheet webhook")
            self.state = SubmissionState(
                SubmissionStatus.ERROR, str(e) or WEBHOOK_FAILURE_MESSAGE
            )
            return False
        finally:
            self._in_flight = False

        self.reset()
        self.state = SubmissionState(SubmissionStatus.SUBMITTED)
        return True
