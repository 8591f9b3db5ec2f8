"""
Общие фикстуры для тестов Gate Bot
"""
import os

# Settings() читается при импорте — окружение задаём до импортов проекта
os.environ.setdefault("BOT_TOKEN", "123456:TEST-TOKEN")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_CHAT_ID", "1000")
os.environ.setdefault("CHANNEL_USERNAMES", "@main_channel")
os.environ.setdefault("EXTERNAL_PROFILE_URL", "https://instagram.com/test_profile")

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiogram.enums import ChatMemberStatus
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from shared.config.settings import Channel
from shared.database.base import Base
from gate_bot.database.models import Post

ADMIN_ID = 1000
USER_ID = 555


@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite, одна база на все сессии теста"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_post(test_session):
    """Сохранённый пост abc123"""
    post = Post(post_id="abc123", file_id="DOC_FILE_ID", caption="Sale")
    test_session.add(post)
    await test_session.commit()
    return post


@pytest.fixture
def channels():
    return [
        Channel(name="Main", username="@main_channel"),
        Channel(name="Second", username="@second_channel"),
    ]


@pytest.fixture
def mock_bot():
    """Bot с подпиской пользователя на все каналы"""
    bot = AsyncMock()
    bot.get_chat_member.return_value = SimpleNamespace(status=ChatMemberStatus.MEMBER)
    bot.me.return_value = SimpleNamespace(username="gate_test_bot")
    return bot


@pytest.fixture
def fsm_storage():
    return MemoryStorage()


@pytest.fixture
def make_state(fsm_storage):
    """FSM-контекст пользователя в личном чате с ботом"""
    def _make_state(user_id: int = ADMIN_ID) -> FSMContext:
        key = StorageKey(bot_id=42, chat_id=user_id, user_id=user_id)
        return FSMContext(storage=fsm_storage, key=key)
    return _make_state


@pytest.fixture
def admin_state(make_state):
    return make_state(ADMIN_ID)
