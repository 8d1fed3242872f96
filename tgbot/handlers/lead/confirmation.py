"""
Submission handlers for the lead form.
"""

import asyncio

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery

from tgbot.forms.controller import LeadFormController
from tgbot.forms.sessions import FormSessions

from .form_fields import show_card

confirmation_router = Router()

IN_FLIGHT_NOTICE = "⏳ Seu cadastro já está sendo enviado, aguarde."


@confirmation_router.callback_query(F.data == "lead:submit")
async def submit_lead(
    callback: CallbackQuery,
    state: FSMContext,
    lead_form: LeadFormController,
    form_sessions: FormSessions,
):
    if lead_form.submitting:
        await callback.answer(IN_FLIGHT_NOTICE, show_alert=True)
        return

    await state.clear()
    submission = asyncio.create_task(lead_form.submit())
    # let the task validate and mark itself in flight before rendering
    await asyncio.sleep(0)
    if lead_form.submitting:
        await callback.answer()
        await show_card(callback.message, lead_form, edit=True)
        submitted = await submission
    else:
        submitted = await submission
        if submitted:
            await callback.answer()
        else:
            await callback.answer("Corrija os campos destacados.")

    await show_card(callback.message, lead_form, edit=True)
    if submitted:
        # the next update of this chat starts from a fresh form
        form_sessions.discard(callback.message.chat.id)


@confirmation_router.callback_query(F.data == "lead:reset")
async def reset_lead(
    callback: CallbackQuery,
    state: FSMContext,
    lead_form: LeadFormController,
    form_sessions: FormSessions,
):
    if not lead_form.reset():
        await callback.answer(IN_FLIGHT_NOTICE, show_alert=True)
        return

    await state.clear()
    form_sessions.discard(callback.message.chat.id)
    await show_card(callback.message, lead_form, edit=True)
    await callback.answer("Formulário limpo.")
