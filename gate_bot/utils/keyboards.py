"""
Inline клавиатуры для Gate Bot
"""
from typing import List

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from shared.config.settings import Channel
from gate_bot import texts

GET_CODE_CALLBACK = "get_code"
CHECK_CALLBACK_PREFIX = "check_"

# Лимит Telegram на callback_data
MAX_CALLBACK_DATA = 64


def check_callback_data(post_id: str) -> str:
    return f"{CHECK_CALLBACK_PREFIX}{post_id}"


class Keyboards:
    """Клавиатуры для пользователей и канала"""

    @staticmethod
    def main_menu(channel: Channel, external_profile_url: str) -> InlineKeyboardMarkup:
        """
        Меню для /start без параметров

        Args:
            channel: Основной канал
            external_profile_url: Ссылка на внешний профиль
        """
        builder = InlineKeyboardBuilder()

        builder.row(InlineKeyboardButton(text=texts.BTN_CHANNEL, url=channel.url))
        builder.row(InlineKeyboardButton(text=texts.BTN_EXTERNAL_PROFILE, url=external_profile_url))
        builder.row(InlineKeyboardButton(text=texts.BTN_GET_CODE, callback_data=GET_CODE_CALLBACK))

        return builder.as_markup()

    @staticmethod
    def subscribe_prompt(
        channels: List[Channel],
        external_profile_url: str,
        post_id: str
    ) -> InlineKeyboardMarkup:
        """
        Кнопки подписки на каждый канал + повторная проверка для post_id

        Кнопка проверки не добавляется, если post_id не помещается в callback_data.
        """
        builder = InlineKeyboardBuilder()

        for channel in channels:
            builder.row(
                InlineKeyboardButton(
                    text=texts.BTN_SUBSCRIBE_CHANNEL.format(name=channel.name),
                    url=channel.url
                )
            )

        builder.row(InlineKeyboardButton(text=texts.BTN_SUBSCRIBE_EXTERNAL, url=external_profile_url))

        callback_data = check_callback_data(post_id)
        if len(callback_data.encode("utf-8")) <= MAX_CALLBACK_DATA:
            builder.row(
                InlineKeyboardButton(text=texts.BTN_CHECK_SUBSCRIPTION, callback_data=callback_data)
            )

        return builder.as_markup()

    @staticmethod
    def channel_post() -> InlineKeyboardMarkup:
        """Кнопка "Get Code" под постом в канале"""
        builder = InlineKeyboardBuilder()
        builder.row(InlineKeyboardButton(text=texts.BTN_GET_CODE, callback_data=GET_CODE_CALLBACK))
        return builder.as_markup()
