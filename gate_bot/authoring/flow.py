"""
AuthoringFlow — создание и публикация поста админом.

/start (админ) → черновик в режиме сбора → медиа/текст/файл → /sendpost:
1. Проверяем, что есть медиа, текст и файл
2. Генерируем post_id и сохраняем пост в БД
3. Отправляем фото/видео в канал с подписью "...\n\nPost ID: <id>" и кнопкой "Get Code"
4. Успех — FSM сброшен; ошибка отправки — черновик остаётся для повтора /sendpost
"""
import enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shared.database.base import AsyncSessionLocal
from gate_bot.authoring.draft import (
    KEY_LAST_POST_ID,
    Draft,
    DraftEvent,
    FileReceived,
    MediaKind,
    MediaReceived,
    PostAuthoring,
    TextReceived,
    apply_event,
    missing_fields,
)
from gate_bot.errors import PostStoreError, PublishError
from gate_bot.storage.post_store import PostStore
from gate_bot.utils.keyboards import Keyboards
from gate_bot.utils.post_links import generate_post_id, render_caption


class PublishStatus(enum.Enum):
    IGNORED = "ignored"                # Админ ещё не начинал пост
    MISSING_FIELDS = "missing_fields"  # Черновик неполный
    PUBLISHED = "published"
    FAILED = "failed"                  # Ошибка БД или отправки в канал


@dataclass
class PublishResult:
    status: PublishStatus
    post_id: Optional[str] = None
    missing: List[str] = field(default_factory=list)
    error: Optional[str] = None


def event_from_message(message: Message) -> Optional[DraftEvent]:
    """
    Преобразует сообщение админа в событие черновика.

    Команды и неподдерживаемый контент → None.
    """
    if message.video:
        return MediaReceived(MediaKind.VIDEO, message.video.file_id, message.caption)

    if message.photo:
        # Берём самое большое разрешение
        largest = max(message.photo, key=lambda size: size.width * size.height)
        return MediaReceived(MediaKind.PHOTO, largest.file_id, message.caption)

    if message.text and not message.text.startswith("/"):
        return TextReceived(message.text)

    if message.document:
        return FileReceived(message.document.file_id)

    return None


class AuthoringFlow:
    """Сбор черновика и публикация поста в канал"""

    def __init__(
        self,
        bot: Bot,
        publish_channel: str,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        post_id_factory: Callable[[], str] = generate_post_id,
    ):
        self.bot = bot
        self.publish_channel = publish_channel
        self.session_factory = session_factory
        self.post_id_factory = post_id_factory

    async def begin(self, state: FSMContext):
        """Новый черновик (предыдущий несохранённый теряется)"""
        await state.clear()
        await state.set_state(PostAuthoring.collecting)
        logger.info(f"Admin {state.key.user_id} started a new post")

    async def handle_event(self, state: FSMContext, event: DraftEvent) -> Optional[str]:
        """
        Применяет событие к открытому черновику админа.

        Returns:
            Текст ответа или None (черновик не открыт)
        """
        if await state.get_state() != PostAuthoring.collecting.state:
            return None

        updates, reply = apply_event(event)
        await state.update_data(**updates)
        logger.debug(f"Draft of {state.key.user_id} updated by {type(event).__name__}")
        return reply

    async def publish(self, state: FSMContext) -> PublishResult:
        """
        Публикует черновик админа (/sendpost).

        После публикации в данных FSM остаётся только last_post_id —
        повторный /sendpost сообщит, что не хватает всех полей.
        """
        admin_id = state.key.user_id
        data = await state.get_data()

        collecting = await state.get_state() == PostAuthoring.collecting.state
        if not collecting and KEY_LAST_POST_ID not in data:
            return PublishResult(PublishStatus.IGNORED)

        missing = missing_fields(data)
        if missing:
            logger.info(f"Admin {admin_id} tried to publish incomplete draft, missing: {missing}")
            return PublishResult(PublishStatus.MISSING_FIELDS, missing=missing)

        draft = Draft.from_data(data)
        post_id = self.post_id_factory()

        try:
            await self._save_post(draft, post_id)
            await self._send_to_channel(draft, post_id)
        except (PostStoreError, PublishError) as e:
            logger.error(f"Publishing post {post_id} failed: {e}")
            return PublishResult(PublishStatus.FAILED, post_id=post_id, error=str(e))

        await state.set_state(None)
        await state.set_data({KEY_LAST_POST_ID: post_id})
        logger.info(f"Post {post_id} published to {self.publish_channel}")
        return PublishResult(PublishStatus.PUBLISHED, post_id=post_id)

    async def _save_post(self, draft: Draft, post_id: str):
        async with self.session_factory() as db_session:
            await PostStore(db_session).create(
                post_id=post_id,
                file_id=draft.attached_file,
                caption=draft.caption,
            )

    async def _send_to_channel(self, draft: Draft, post_id: str):
        caption = render_caption(draft.caption, post_id)
        reply_markup = Keyboards.channel_post()

        try:
            if draft.media.kind == MediaKind.VIDEO:
                await self.bot.send_video(
                    chat_id=self.publish_channel,
                    video=draft.media.file_id,
                    caption=caption,
                    reply_markup=reply_markup
                )
            else:
                await self.bot.send_photo(
                    chat_id=self.publish_channel,
                    photo=draft.media.file_id,
                    caption=caption,
                    reply_markup=reply_markup
                )
        except TelegramAPIError as e:
            raise PublishError(e.message) from e
