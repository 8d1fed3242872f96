"""
Waiting-list lead form: option vocabularies, validation schema, payload
building and the controller that submits leads to the spreadsheet webhook.
"""

from .controller import (
    LeadFormController,
    SubmissionState,
    SubmissionStatus,
    UnknownFieldError,
    UnknownOptionError,
    default_values,
    toggle_option,
)
from .schema import LeadFormValues, validate, validate_field
from .sessions import FormSessions

__all__ = [
    "FormSessions",
    "LeadFormController",
    "LeadFormValues",
    "SubmissionState",
    "SubmissionStatus",
    "UnknownFieldError",
    "UnknownOptionError",
    "default_values",
    "toggle_option",
    "validate",
    "validate_field",
]
