"""
Тесты для создания и публикации поста админом
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from aiogram.exceptions import TelegramBadRequest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from gate_bot import texts
from gate_bot.authoring.draft import (
    KEY_LAST_POST_ID,
    Draft,
    FileReceived,
    MediaKind,
    MediaReceived,
    PostAuthoring,
    TextReceived,
)
from gate_bot.authoring.flow import AuthoringFlow, PublishStatus, event_from_message
from gate_bot.database.models import Post
from gate_bot.utils.keyboards import GET_CODE_CALLBACK

CHANNEL = "@main_channel"


def make_flow(bot, session_factory) -> AuthoringFlow:
    return AuthoringFlow(
        bot=bot,
        publish_channel=CHANNEL,
        session_factory=session_factory,
        post_id_factory=lambda: "abc123",
    )


async def fill_draft(flow: AuthoringFlow, state, kind: MediaKind = MediaKind.PHOTO):
    await flow.begin(state)
    await flow.handle_event(state, MediaReceived(kind, "MEDIA_ID", "Sale"))
    await flow.handle_event(state, FileReceived("DOC_ID"))


async def current_draft(state) -> Draft:
    return Draft.from_data(await state.get_data())


async def count_posts(session) -> int:
    return await session.scalar(select(func.count(Post.id)))


class BrokenSession:
    """Сессия БД, у которой любая запись падает"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def add(self, obj):
        pass

    async def commit(self):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    async def rollback(self):
        pass


def message(**fields) -> SimpleNamespace:
    base = dict(video=None, photo=None, text=None, document=None, caption=None)
    base.update(fields)
    return SimpleNamespace(**base)


class TestEventFromMessage:
    """Тесты преобразования сообщений админа в события"""

    def test_photo_picks_largest_size(self):
        photo = [
            SimpleNamespace(file_id="small", width=90, height=90),
            SimpleNamespace(file_id="large", width=1280, height=960),
            SimpleNamespace(file_id="medium", width=320, height=240),
        ]

        event = event_from_message(message(photo=photo, caption="Sale"))

        assert event == MediaReceived(MediaKind.PHOTO, "large", "Sale")

    def test_video(self):
        event = event_from_message(message(video=SimpleNamespace(file_id="VID")))
        assert event == MediaReceived(MediaKind.VIDEO, "VID", None)

    def test_plain_text(self):
        assert event_from_message(message(text="Caption")) == TextReceived("Caption")

    def test_command_is_not_caption(self):
        assert event_from_message(message(text="/help")) is None

    def test_document(self):
        event = event_from_message(message(document=SimpleNamespace(file_id="DOC")))
        assert event == FileReceived("DOC")

    def test_unsupported_content(self):
        assert event_from_message(message()) is None


class TestAuthoringFlow:
    """Тесты для AuthoringFlow"""

    @pytest.mark.asyncio
    async def test_events_ignored_without_open_draft(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)

        assert await flow.handle_event(admin_state, TextReceived("text")) is None
        assert await admin_state.get_data() == {}

    @pytest.mark.asyncio
    async def test_begin_sets_collecting_state(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)

        await flow.begin(admin_state)

        assert await admin_state.get_state() == PostAuthoring.collecting.state

    @pytest.mark.asyncio
    async def test_begin_discards_previous_draft(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)
        await flow.begin(admin_state)
        await flow.handle_event(admin_state, TextReceived("unsaved"))

        await flow.begin(admin_state)

        assert await admin_state.get_data() == {}

    @pytest.mark.asyncio
    async def test_drafts_are_per_admin(self, mock_bot, session_factory, make_state):
        flow = make_flow(mock_bot, session_factory)
        first, second = make_state(1), make_state(2)
        await flow.begin(first)
        await flow.begin(second)

        await flow.handle_event(first, TextReceived("one"))
        await flow.handle_event(second, TextReceived("two"))

        assert (await current_draft(first)).caption == "one"
        assert (await current_draft(second)).caption == "two"

    @pytest.mark.asyncio
    async def test_publish_without_draft_is_ignored(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)

        result = await flow.publish(admin_state)

        assert result.status == PublishStatus.IGNORED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("events", [
        [],
        [MediaReceived(MediaKind.VIDEO, "VID", "Caption")],
        [TextReceived("Caption"), FileReceived("DOC")],
        [MediaReceived(MediaKind.PHOTO, "PIC"), FileReceived("DOC")],
    ])
    async def test_incomplete_draft_never_publishes(
        self, mock_bot, session_factory, test_session, admin_state, events
    ):
        flow = make_flow(mock_bot, session_factory)
        await flow.begin(admin_state)
        for event in events:
            await flow.handle_event(admin_state, event)

        result = await flow.publish(admin_state)

        assert result.status == PublishStatus.MISSING_FIELDS
        assert result.missing
        assert await count_posts(test_session) == 0
        mock_bot.send_photo.assert_not_awaited()
        mock_bot.send_video.assert_not_awaited()
        assert await admin_state.get_state() == PostAuthoring.collecting.state

    @pytest.mark.asyncio
    async def test_photo_post_scenario(self, mock_bot, session_factory, test_session, admin_state):
        """Фото "Sale" + документ + /sendpost → один пост и фото в канале"""
        flow = make_flow(mock_bot, session_factory)
        await fill_draft(flow, admin_state, MediaKind.PHOTO)

        result = await flow.publish(admin_state)

        assert result.status == PublishStatus.PUBLISHED
        assert result.post_id == "abc123"

        posts = (await test_session.execute(select(Post))).scalars().all()
        assert len(posts) == 1
        assert posts[0].post_id == "abc123"
        assert posts[0].file_id == "DOC_ID"
        assert posts[0].caption == "Sale"

        kwargs = mock_bot.send_photo.await_args.kwargs
        assert kwargs["chat_id"] == CHANNEL
        assert kwargs["photo"] == "MEDIA_ID"
        assert kwargs["caption"] == "Sale\n\nPost ID: abc123"
        button = kwargs["reply_markup"].inline_keyboard[0][0]
        assert button.text == texts.BTN_GET_CODE
        assert button.callback_data == GET_CODE_CALLBACK
        mock_bot.send_video.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_video_post_sent_as_video(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)
        await fill_draft(flow, admin_state, MediaKind.VIDEO)

        await flow.publish(admin_state)

        assert mock_bot.send_video.await_args.kwargs["video"] == "MEDIA_ID"
        mock_bot.send_photo.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_clears_draft_once(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)
        await fill_draft(flow, admin_state)

        first = await flow.publish(admin_state)

        assert await admin_state.get_state() is None
        assert await admin_state.get_data() == {KEY_LAST_POST_ID: "abc123"}

        second = await flow.publish(admin_state)

        assert first.status == PublishStatus.PUBLISHED
        assert second.status == PublishStatus.MISSING_FIELDS
        assert second.missing == ["media", "caption", "file"]
        assert mock_bot.send_photo.await_count == 1
        # Черновик закрыт — новые сообщения не принимаются до /start
        assert await flow.handle_event(admin_state, TextReceived("late")) is None

    @pytest.mark.asyncio
    async def test_channel_failure_keeps_draft_and_post(
        self, mock_bot, session_factory, test_session, admin_state
    ):
        """Пост сохранён, отправка в канал упала — черновик остаётся"""
        mock_bot.send_photo.side_effect = TelegramBadRequest(
            method=MagicMock(), message="Bad Request: chat not found"
        )
        flow = make_flow(mock_bot, session_factory)
        await fill_draft(flow, admin_state)

        result = await flow.publish(admin_state)

        assert result.status == PublishStatus.FAILED
        assert "chat not found" in result.error
        assert await count_posts(test_session) == 1

        assert await admin_state.get_state() == PostAuthoring.collecting.state
        draft = await current_draft(admin_state)
        assert draft.caption == "Sale"
        assert draft.attached_file == "DOC_ID"

        # Повторный /sendpost без повторной отправки медиа
        mock_bot.send_photo.side_effect = None
        retry = await flow.publish(admin_state)
        assert retry.status == PublishStatus.PUBLISHED
        assert await admin_state.get_state() is None

    @pytest.mark.asyncio
    async def test_store_failure_aborts_before_send(self, mock_bot, session_factory, admin_state):
        """Ошибка записи в БД — в канал ничего не уходит"""
        flow = make_flow(mock_bot, session_factory)
        await fill_draft(flow, admin_state)

        flow.session_factory = BrokenSession

        result = await flow.publish(admin_state)

        assert result.status == PublishStatus.FAILED
        mock_bot.send_photo.assert_not_awaited()
        assert (await current_draft(admin_state)).attached_file == "DOC_ID"

    @pytest.mark.asyncio
    async def test_publish_message_text(self, mock_bot, session_factory, admin_state):
        flow = make_flow(mock_bot, session_factory)
        await flow.begin(admin_state)
        await flow.handle_event(admin_state, TextReceived("Only text"))

        result = await flow.publish(admin_state)

        assert texts.PUBLISH_MISSING.format(fields=", ".join(result.missing)) == (
            "Cannot send the post, missing: media, file."
        )
