from typing import Any

from aiogram import html

from tgbot.forms.controller import LeadFormController, SubmissionStatus
from tgbot.forms.options import FORM_FIELDS, FieldKind, FormField

CONSENT_TEXT = (
    "Concordo em ser contatado(a) pela equipe CoopHub sobre a lista de espera "
    "e o programa beta, e com o uso dos meus dados para esse fim."
)

STATUS_LINES = {
    SubmissionStatus.SUBMITTING: "<b>⏳ Enviando...</b>",
    SubmissionStatus.SUBMITTED: (
        "<b>✅ Cadastro recebido!</b>\nObrigado! Entraremos em contato em breve."
    ),
}


def format_value(form_field: FormField, value: Any) -> str:
    if form_field.kind is FieldKind.CONSENT:
        return "Sim" if value else "Não"
    if form_field.kind is FieldKind.MULTI:
        return html.quote(", ".join(value)) if value else "—"
    return html.quote(value) if value else "—"


def field_prompt(form_field: FormField) -> str:
    if form_field.kind is FieldKind.MULTI:
        return f"<b>{form_field.label}</b>\nSelecione uma ou mais opções:"
    if form_field.kind is FieldKind.SELECT:
        return f"<b>{form_field.label}</b>\nEscolha uma opção:"
    if form_field.kind is FieldKind.CONSENT:
        return f"<b>{form_field.label}</b>\n{CONSENT_TEXT}"
    optional = "" if form_field.required else " (opcional)"
    return f"<b>{form_field.label}</b>{optional}\nDigite sua resposta:"


def generate_summary(form: LeadFormController) -> str:
    """Render the form card: every field, its error if any, progress and status."""
    summary = "📋 <b>Lista de espera CoopHub</b>\n\n"
    required_fields = [f for f in FORM_FIELDS if f.required]
    total_fields = len(required_fields)
    filled_fields = 0

    for form_field in FORM_FIELDS:
        value = form.values.get(form_field.name)
        summary += f"{form_field.label}: {format_value(form_field, value)}\n"
        error = form.errors.get(form_field.name)
        if error:
            summary += f"    ❌ <i>{html.quote(error)}</i>\n"
        if form_field.required and value:
            filled_fields += 1

    progress_percentage = (
        int((filled_fields / total_fields) * 100) if total_fields > 0 else 0
    )

    progress_bar = (
        "\n<b>Progresso:</b> ["
        + "█" * (progress_percentage // 10)
        + "░" * (10 - (progress_percentage // 10))
        + f"] {progress_percentage}%\n"
    )
    progress_bar += f"<b>Preenchidos:</b> {filled_fields}/{total_fields} obrigatórios"
    summary += progress_bar

    state = form.state
    if state.status is SubmissionStatus.ERROR:
        summary += f"\n\n<b>❌ Ops, algo deu errado:</b> {html.quote(state.message)}"
    elif state.status in STATUS_LINES:
        summary += f"\n\n{STATUS_LINES[state.status]}"

    return summary
