"""
Общие настройки бота
"""
from dataclasses import dataclass
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator


@dataclass(frozen=True)
class Channel:
    """Канал, подписка на который обязательна"""
    name: str
    username: str

    @property
    def url(self) -> str:
        """Публичная ссылка t.me на канал"""
        return f"https://t.me/{self.username.lstrip('@')}"


class Settings(BaseSettings):
    """Настройки приложения"""

    # Telegram Bot Token
    bot_token: str = Field(..., env="BOT_TOKEN")

    # Database
    database_url: str = Field(..., env="DATABASE_URL")

    # Admin Settings
    admin_chat_id: int = Field(..., env="ADMIN_CHAT_ID")

    # Каналы: "@first,@second"
    channel_usernames: str = Field(..., env="CHANNEL_USERNAMES")
    # Подписи кнопок: "First,Second" (по умолчанию — сами username)
    channel_names: str = Field(default="", env="CHANNEL_NAMES")
    # Куда публикуются посты (по умолчанию — первый канал)
    publish_channel: Optional[str] = Field(default=None, env="PUBLISH_CHANNEL")

    # Внешний профиль (Instagram и т.п.)
    external_profile_url: str = Field(..., env="EXTERNAL_PROFILE_URL")

    # Other Settings
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    @model_validator(mode='after')
    def check_channels(self) -> 'Settings':
        """Без каналов бот не может проверять подписку — падаем сразу"""
        if not self.channels:
            raise ValueError("CHANNEL_USERNAMES must contain at least one channel")
        return self

    @property
    def channels(self) -> List[Channel]:
        """Преобразует строки каналов в список Channel (порядок сохраняется)"""
        usernames = [u.strip() for u in self.channel_usernames.split(",") if u.strip()]
        names = [n.strip() for n in self.channel_names.split(",")]
        return [
            Channel(
                name=names[i] if i < len(names) and names[i] else username,
                username=username,
            )
            for i, username in enumerate(usernames)
        ]

    @property
    def publish_target(self) -> str:
        """Канал для публикации постов"""
        return self.publish_channel or self.channels[0].username

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Глобальный экземпляр настроек
settings = Settings()
