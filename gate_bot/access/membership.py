"""
MembershipOracle — проверка подписки пользователя на каналы через Bot API.

Локального состояния нет: каждый вызов — запрос getChatMember.
Любая ошибка API считается отсутствием подписки.
"""
from typing import Iterable, Optional

from aiogram import Bot
from aiogram.enums import ChatMemberStatus
from aiogram.exceptions import TelegramAPIError
from loguru import logger

from shared.config.settings import Channel

MEMBER_STATUSES = {
    ChatMemberStatus.CREATOR,
    ChatMemberStatus.ADMINISTRATOR,
    ChatMemberStatus.MEMBER,
}


class MembershipOracle:
    """Отвечает на вопрос «состоит ли пользователь U в канале C?»"""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def is_member(self, channel: Channel, user_id: int) -> bool:
        """
        Проверяет подписку на один канал.

        Returns:
            True если пользователь в канале; False если вышел, забанен
            или канал/пользователь недоступен
        """
        try:
            member = await self.bot.get_chat_member(chat_id=channel.username, user_id=user_id)
        except TelegramAPIError as e:
            logger.warning(f"Membership check failed for {user_id} in {channel.username}: {e}")
            return False

        if member.status in MEMBER_STATUSES:
            return True
        # Ограниченный участник остаётся в канале, пока is_member=True
        if member.status == ChatMemberStatus.RESTRICTED:
            return bool(getattr(member, "is_member", False))
        return False

    async def first_missing_channel(
        self,
        channels: Iterable[Channel],
        user_id: int
    ) -> Optional[Channel]:
        """
        Обходит каналы по порядку и останавливается на первом без подписки.

        Returns:
            Первый канал без подписки или None, если подписан везде
        """
        for channel in channels:
            if not await self.is_member(channel, user_id):
                logger.info(f"User {user_id} is not subscribed to {channel.username}")
                return channel
        return None
