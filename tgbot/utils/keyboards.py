"""
Common keyboard utilities for the bot.
"""

from aiogram.types import (
    KeyboardButton,
    ReplyKeyboardMarkup,
)

LEAD_BUTTON_TEXT = "📝 Lista de espera"
HELP_BUTTON_TEXT = "❓ Ajuda"


def get_main_keyboard() -> ReplyKeyboardMarkup:
    """
    Returns the main keyboard with common commands that should be available at all times.
    """
    keyboard = [
        [
            KeyboardButton(text=LEAD_BUTTON_TEXT),
            KeyboardButton(text=HELP_BUTTON_TEXT),
        ]
    ]
    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        one_time_keyboard=False,
        input_field_placeholder="Escolha uma opção ou digite uma mensagem",
    )
