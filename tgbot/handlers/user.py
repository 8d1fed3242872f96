from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from tgbot.utils.keyboards import HELP_BUTTON_TEXT, get_main_keyboard

user_router = Router()


@user_router.message(CommandStart())
async def user_start(message: Message):
    await message.answer(
        f"""
👋 Olá, {message.from_user.first_name}!

Bem-vindo(a) à lista de espera do <b>CoopHub</b>, a plataforma de gestão para cooperativas.

📝 <b>Como participar:</b>
1️⃣ Toque em "📝 Lista de espera" ou envie /lead
2️⃣ Preencha os campos do formulário tocando em cada botão
3️⃣ Toque em "🚀 Enviar" para entrar na lista

Precisa de ajuda? Envie /help.
        """,
        parse_mode="HTML",
        reply_markup=get_main_keyboard(),
    )


@user_router.message(Command("help"))
@user_router.message(F.text == HELP_BUTTON_TEXT)
async def help_command(message: Message):
    help_text = """
🌟 <b>Lista de espera CoopHub</b> - Ajuda

🚀 <b>Comandos</b>
• <code>/start</code> - Boas-vindas
• <code>/lead</code>  - Abrir o formulário
• <code>/help</code>  - Mostrar esta ajuda

📋 <b>Formulário</b>
• Toque em um campo para preenchê-lo
• Campos com ⚠️ precisam de correção
• Em objetivos, problemas e módulos você pode marcar várias opções
• "🧹 Limpar" apaga tudo o que foi preenchido
"""
    await message.answer(help_text, parse_mode="HTML", reply_markup=get_main_keyboard())
