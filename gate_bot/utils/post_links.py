"""
Post ID: генерация, встраивание в подпись поста и извлечение обратно.
"""
import re
import secrets
from typing import Optional

from aiogram import Bot
from aiogram.utils.deep_linking import create_start_link

from gate_bot import texts

POST_ID_LENGTH = 6
POST_ID_PATTERN = re.compile(r"Post ID: (\w+)", re.ASCII)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def generate_post_id(length: int = POST_ID_LENGTH) -> str:
    """
    Случайный base-36 идентификатор поста.

    Уникальность по хранилищу НЕ проверяется.
    """
    return _to_base36(secrets.randbits(64))[-length:]


def render_caption(caption: str, post_id: str) -> str:
    """Подпись поста для канала: исходный текст + строка с Post ID"""
    return texts.POST_CAPTION.format(caption=caption, post_id=post_id)


def extract_post_id(caption: Optional[str]) -> Optional[str]:
    """
    Достаёт Post ID из подписи сообщения канала.

    Returns:
        post_id или None, если в подписи нет "Post ID: ..."
    """
    if not caption:
        return None
    match = POST_ID_PATTERN.search(caption)
    return match.group(1) if match else None


async def build_start_link(bot: Bot, post_id: str) -> str:
    """Deep link вида https://t.me/<bot>?start=<post_id>"""
    return await create_start_link(bot, post_id)
