"""
Обработчики inline-кнопок: повторная проверка подписки и "Get Code"
"""
from aiogram import Bot, Router, F
from aiogram.exceptions import TelegramAPIError
from aiogram.types import CallbackQuery
from loguru import logger

from gate_bot.access.gate import AccessGate
from gate_bot.utils.keyboards import CHECK_CALLBACK_PREFIX, GET_CODE_CALLBACK
from gate_bot.utils.post_links import build_start_link, extract_post_id

router = Router(name="callbacks")


@router.callback_query(F.data.startswith(CHECK_CALLBACK_PREFIX))
async def callback_check_subscription(callback: CallbackQuery, access_gate: AccessGate):
    """check_<post_id> — повторная проверка подписки"""
    post_id = callback.data[len(CHECK_CALLBACK_PREFIX):]
    await callback.answer()

    if not post_id:
        return

    chat_id = callback.message.chat.id if callback.message else None
    logger.info(f"[CALLBACK] recheck: user={callback.from_user.id}, post={post_id}")
    await access_gate.request_file(callback.from_user.id, post_id, chat_id=chat_id)


@router.callback_query(F.data == GET_CODE_CALLBACK)
async def callback_get_code(callback: CallbackQuery, bot: Bot):
    """
    "Get Code" под постом в канале — отправляет пользователя в бота
    по deep link с post_id из подписи.
    """
    post_id = extract_post_id(getattr(callback.message, "caption", None))

    try:
        if not post_id:
            await callback.answer()
            return

        link = await build_start_link(bot, post_id)
        await callback.answer(url=link)
    except (TelegramAPIError, ValueError) as e:
        # ValueError — payload не подходит для deep link
        logger.error(f"[CALLBACK] get_code failed for post {post_id!r}: {e}")
        try:
            await callback.answer()
        except TelegramAPIError as answer_error:
            logger.warning(f"[CALLBACK] get_code answer failed: {answer_error}")


@router.callback_query()
async def callback_unknown(callback: CallbackQuery):
    """Неизвестные кнопки молча игнорируются"""
    await callback.answer()
