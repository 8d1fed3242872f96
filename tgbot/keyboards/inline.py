"""Inline keyboards for the waiting-list form card."""

from typing import List, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from tgbot.forms.controller import LeadFormController
from tgbot.forms.options import FORM_FIELDS, FormField

BACK_BTN = InlineKeyboardButton(text="⬅️ Voltar", callback_data="lead:back")
SELECTED_MARK = "✅ "


def back_markup(
    extra_rows: Sequence[List[InlineKeyboardButton]] | None = None,
) -> InlineKeyboardMarkup:
    rows = [*extra_rows] if extra_rows else []
    rows.append([BACK_BTN])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def _field_button_text(form: LeadFormController, form_field: FormField) -> str:
    value = form.values.get(form_field.name)
    if form_field.name in form.errors:
        prefix = "⚠️ "
    elif value:
        prefix = SELECTED_MARK
    else:
        prefix = ""
    return f"{prefix}{form_field.label}"


def form_card_markup(form: LeadFormController) -> InlineKeyboardMarkup:
    """One button per field, then submit and clear."""
    rows = [
        [
            InlineKeyboardButton(
                text=_field_button_text(form, form_field),
                callback_data=f"field:{form_field.name}",
            )
        ]
        for form_field in FORM_FIELDS
    ]
    submit_text = "⏳ Enviando..." if form.submitting else "🚀 Enviar"
    rows.append(
        [
            InlineKeyboardButton(text=submit_text, callback_data="lead:submit"),
            InlineKeyboardButton(text="🧹 Limpar", callback_data="lead:reset"),
        ]
    )
    return InlineKeyboardMarkup(inline_keyboard=rows)


def options_markup(form_field: FormField, current: str) -> InlineKeyboardMarkup:
    """Single-choice options; callbacks carry the option index to stay under 64 bytes."""
    rows = [
        [
            InlineKeyboardButton(
                text=f"{SELECTED_MARK if option == current else ''}{option}",
                callback_data=f"pick:{form_field.name}:{index}",
            )
        ]
        for index, option in enumerate(form_field.options)
    ]
    return back_markup(rows)


def pills_markup(form_field: FormField, selected: Sequence[str]) -> InlineKeyboardMarkup:
    rows = [
        [
            InlineKeyboardButton(
                text=f"{SELECTED_MARK if option in selected else ''}{option}",
                callback_data=f"toggle:{form_field.name}:{index}",
            )
        ]
        for index, option in enumerate(form_field.options)
    ]
    rows.append([InlineKeyboardButton(text="✔️ Concluir", callback_data="lead:card")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def consent_markup(given: bool) -> InlineKeyboardMarkup:
    text = "☑️ Retirar consentimento" if given else "✅ Eu concordo"
    return back_markup(
        [[InlineKeyboardButton(text=text, callback_data="consent:toggle")]]
    )
