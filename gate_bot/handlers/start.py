"""
Обработчики /start: меню, выдача файла по deep link, начало поста админом
"""
from aiogram import Router
from aiogram.filters import CommandStart, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger

from shared.config.settings import settings
from gate_bot import texts
from gate_bot.access.gate import AccessGate
from gate_bot.authoring.flow import AuthoringFlow
from gate_bot.handlers.admin import is_admin
from gate_bot.utils.keyboards import Keyboards

router = Router(name="start")


async def _begin_authoring(message: Message, state: FSMContext, authoring_flow: AuthoringFlow):
    await authoring_flow.begin(state)
    await message.answer(texts.AUTHORING_STARTED)


@router.message(CommandStart(deep_link=True))
async def cmd_start_with_post(
    message: Message,
    command: CommandObject,
    state: FSMContext,
    access_gate: AccessGate,
    authoring_flow: AuthoringFlow,
):
    """
    /start <post_id> — запрос файла поста.
    Админ всегда начинает новый пост, даже с параметром.
    """
    if is_admin(message.chat.id):
        await _begin_authoring(message, state, authoring_flow)
        return

    post_id = command.args.strip()
    logger.info(f"User {message.from_user.id} requested post {post_id!r}")
    await access_gate.request_file(message.from_user.id, post_id, chat_id=message.chat.id)


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, authoring_flow: AuthoringFlow):
    """/start без параметров: меню для пользователя, новый пост для админа"""
    if is_admin(message.chat.id):
        await _begin_authoring(message, state, authoring_flow)
        return

    await message.answer(
        texts.MENU_PROMPT,
        reply_markup=Keyboards.main_menu(settings.channels[0], settings.external_profile_url)
    )
