"""
AccessGate — выдача файла поста только подписчикам всех каналов.

Алгоритм:
1. Проверяем подписку на каждый канал по порядку (до первого отказа)
2. Нет подписки → просим подписаться + кнопка повторной проверки check_<post_id>
3. Подписан везде → ищем пост; нашли — отправляем файл, нет — "File not found!"

Gate ничего не пишет в БД и ничего не повторяет сам.
"""
import enum
from dataclasses import dataclass
from typing import Callable, List, Optional

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import Channel
from shared.database.base import AsyncSessionLocal
from gate_bot import texts
from gate_bot.access.membership import MembershipOracle
from gate_bot.storage.post_store import PostStore
from gate_bot.utils.keyboards import Keyboards


class GateResult(enum.Enum):
    """Чем закончился запрос файла"""
    DELIVERED = "delivered"
    NOT_FOUND = "not_found"
    SUBSCRIBE_REQUIRED = "subscribe_required"
    ERROR = "error"


@dataclass
class GateOutcome:
    result: GateResult
    post_id: str
    missing_channel: Optional[Channel] = None
    file_id: Optional[str] = None


class AccessGate:
    """Проверка подписки и выдача файла"""

    def __init__(
        self,
        bot: Bot,
        channels: List[Channel],
        external_profile_url: str,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        oracle: Optional[MembershipOracle] = None,
    ):
        self.bot = bot
        self.channels = channels
        self.external_profile_url = external_profile_url
        self.session_factory = session_factory
        self.oracle = oracle or MembershipOracle(bot)

    async def request_file(
        self,
        user_id: int,
        post_id: str,
        chat_id: Optional[int] = None
    ) -> GateOutcome:
        """
        Запрос файла поста пользователем.

        Args:
            user_id: Telegram ID пользователя (проверяется подписка)
            post_id: ID поста из deep link или callback (не доверенный ввод)
            chat_id: Куда отвечать (по умолчанию личка пользователя)

        Returns:
            GateOutcome. Исключения наружу не выходят.
        """
        chat_id = chat_id if chat_id is not None else user_id

        try:
            missing = await self.oracle.first_missing_channel(self.channels, user_id)
            if missing is not None:
                await self.bot.send_message(
                    chat_id=chat_id,
                    text=texts.SUBSCRIBE_PROMPT,
                    reply_markup=Keyboards.subscribe_prompt(
                        self.channels, self.external_profile_url, post_id
                    )
                )
                return GateOutcome(GateResult.SUBSCRIBE_REQUIRED, post_id, missing_channel=missing)

            async with self.session_factory() as session:
                post = await PostStore(session).get_by_post_id(post_id)

            if post is None:
                logger.info(f"Post {post_id!r} requested by {user_id} not found")
                await self.bot.send_message(chat_id=chat_id, text=texts.FILE_NOT_FOUND)
                return GateOutcome(GateResult.NOT_FOUND, post_id)

            await self.bot.send_document(chat_id=chat_id, document=post.file_id)
            logger.info(f"File for post {post_id} delivered to {user_id}")
            return GateOutcome(GateResult.DELIVERED, post_id, file_id=post.file_id)

        except Exception as e:
            logger.error(f"Error delivering post {post_id!r} to {user_id}: {e}")
            await self._notify_error(chat_id)
            return GateOutcome(GateResult.ERROR, post_id)

    async def _notify_error(self, chat_id: int):
        try:
            await self.bot.send_message(chat_id=chat_id, text=texts.GENERIC_ERROR)
        except TelegramAPIError as e:
            logger.error(f"Could not send error notice to {chat_id}: {e}")
