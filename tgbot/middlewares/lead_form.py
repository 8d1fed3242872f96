from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from tgbot.forms.sessions import FormSessions


class LeadFormMiddleware(BaseMiddleware):
    """Passes the chat's form controller to handlers as ``lead_form``
    and the registry itself as ``form_sessions``."""

    def __init__(self, sessions: FormSessions) -> None:
        self.sessions = sessions

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        chat_id = None
        if isinstance(event, Message):
            chat_id = event.chat.id
        elif isinstance(event, CallbackQuery) and event.message:
            chat_id = event.message.chat.id

        data["form_sessions"] = self.sessions
        if chat_id is not None:
            data["lead_form"] = self.sessions.get(chat_id)
        return await handler(event, data)
