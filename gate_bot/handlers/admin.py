"""
Обработчики админа: сбор черновика и /sendpost
"""
from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger

from shared.config.settings import settings
from gate_bot import texts
from gate_bot.authoring.draft import PostAuthoring
from gate_bot.authoring.flow import AuthoringFlow, PublishStatus, event_from_message

router = Router(name="admin")


def is_admin(chat_id: int) -> bool:
    """Проверяет, является ли чат админским"""
    return chat_id == settings.admin_chat_id


@router.message(Command("sendpost"))
async def cmd_sendpost(message: Message, state: FSMContext, authoring_flow: AuthoringFlow):
    """Публикация черновика в канал"""
    if not is_admin(message.chat.id):
        return

    result = await authoring_flow.publish(state)

    if result.status == PublishStatus.IGNORED:
        return

    if result.status == PublishStatus.MISSING_FIELDS:
        await message.answer(texts.PUBLISH_MISSING.format(fields=", ".join(result.missing)))
    elif result.status == PublishStatus.FAILED:
        await message.answer(texts.PUBLISH_ERROR.format(error=result.error))
    else:
        await message.answer(texts.PUBLISH_SUCCESS)


@router.message(PostAuthoring.collecting)
async def handle_draft_message(message: Message, state: FSMContext, authoring_flow: AuthoringFlow):
    """Медиа, текст и файлы от админа при открытом черновике"""
    if not is_admin(message.chat.id):
        await state.clear()
        return

    event = event_from_message(message)
    if event is None:
        logger.debug(f"Unsupported admin message ignored: {message.message_id}")
        return

    reply = await authoring_flow.handle_event(state, event)
    if reply:
        await message.answer(reply)
