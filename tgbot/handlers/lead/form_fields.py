"""
Form card handlers: showing the card and editing each field.
"""

import logging

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from tgbot.forms.controller import LeadFormController
from tgbot.forms.options import FIELDS_BY_NAME, FieldKind
from tgbot.keyboards.inline import (
    back_markup,
    consent_markup,
    form_card_markup,
    options_markup,
    pills_markup,
)
from tgbot.states.lead_form import LeadForm
from tgbot.utils.keyboards import LEAD_BUTTON_TEXT

from .core import field_prompt, generate_summary

logger = logging.getLogger(__name__)

form_fields_router = Router()


async def show_card(message: Message, form: LeadFormController, edit: bool = False):
    text = generate_summary(form)
    markup = form_card_markup(form)
    if edit:
        try:
            await message.edit_text(text, parse_mode="HTML", reply_markup=markup)
            return
        except TelegramBadRequest as e:
            # "message is not modified" and messages too old to edit
            logger.debug("Could not edit form card: %s", e)
            if "not modified" in str(e):
                return
    await message.answer(text, parse_mode="HTML", reply_markup=markup)


@form_fields_router.message(Command("lead"))
@form_fields_router.message(F.text == LEAD_BUTTON_TEXT)
async def start_lead_form(message: Message, state: FSMContext, lead_form: LeadFormController):
    await state.clear()
    await show_card(message, lead_form)


@form_fields_router.callback_query(F.data.in_({"lead:card", "lead:back"}))
async def back_to_card(callback: CallbackQuery, state: FSMContext, lead_form: LeadFormController):
    await state.clear()
    await show_card(callback.message, lead_form, edit=True)
    await callback.answer()


@form_fields_router.callback_query(F.data.startswith("field:"))
async def open_field(callback: CallbackQuery, state: FSMContext, lead_form: LeadFormController):
    field_name = callback.data.split(":", 1)[1]
    form_field = FIELDS_BY_NAME.get(field_name)
    if form_field is None:
        await callback.answer("Campo desconhecido.", show_alert=True)
        return

    value = lead_form.values.get(field_name)
    if form_field.kind is FieldKind.TEXT:
        await state.set_state(LeadForm.text_input)
        await state.update_data(field=field_name)
        markup = back_markup()
    elif form_field.kind is FieldKind.SELECT:
        markup = options_markup(form_field, value)
    elif form_field.kind is FieldKind.MULTI:
        markup = pills_markup(form_field, value)
    else:
        markup = consent_markup(bool(value))

    await callback.message.edit_text(
        field_prompt(form_field), parse_mode="HTML", reply_markup=markup
    )
    await callback.answer()


@form_fields_router.message(StateFilter(LeadForm.text_input), F.text)
async def process_text_field(message: Message, state: FSMContext, lead_form: LeadFormController):
    data = await state.get_data()
    field_name = data.get("field")
    await state.clear()
    if field_name not in FIELDS_BY_NAME:
        await show_card(message, lead_form)
        return

    lead_form.set_value(field_name, message.text)
    await show_card(message, lead_form)


@form_fields_router.callback_query(F.data.startswith("pick:"))
async def pick_option(callback: CallbackQuery, lead_form: LeadFormController):
    _, field_name, index = callback.data.split(":")
    form_field = FIELDS_BY_NAME.get(field_name)
    if form_field is None or not index.isdigit() or int(index) >= len(form_field.options):
        await callback.answer("Opção inválida.", show_alert=True)
        return

    lead_form.set_value(field_name, form_field.options[int(index)])
    await show_card(callback.message, lead_form, edit=True)
    await callback.answer()


@form_fields_router.callback_query(F.data.startswith("toggle:"))
async def toggle_pill(callback: CallbackQuery, lead_form: LeadFormController):
    _, field_name, index = callback.data.split(":")
    form_field = FIELDS_BY_NAME.get(field_name)
    if (
        form_field is None
        or form_field.kind is not FieldKind.MULTI
        or not index.isdigit()
        or int(index) >= len(form_field.options)
    ):
        await callback.answer("Opção inválida.", show_alert=True)
        return

    label = form_field.options[int(index)]
    selected = lead_form.toggle(field_name, label)
    action_text = "adicionado" if label in selected else "removido"

    await callback.message.edit_reply_markup(
        reply_markup=pills_markup(form_field, selected)
    )
    await callback.answer(f"{label}: {action_text}")


@form_fields_router.callback_query(F.data == "consent:toggle")
async def toggle_consent(callback: CallbackQuery, lead_form: LeadFormController):
    given = not lead_form.values.get("consent_given", False)
    lead_form.set_value("consent_given", given)
    await show_card(callback.message, lead_form, edit=True)
    await callback.answer()
