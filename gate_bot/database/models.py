"""
Модели базы данных для Gate Bot
"""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.database.base import Base, TimestampMixin


class Post(Base, TimestampMixin):
    """
    Опубликованный пост: файл, выдаваемый подписчикам, и подпись.

    Пост только создаётся и читается, никогда не обновляется.
    post_id не уникален — коллизии генератора не проверяются.
    """
    __tablename__ = "gate_posts"

    id: Mapped[int] = mapped_column(primary_key=True)

    post_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    file_id: Mapped[str] = mapped_column(String(255), nullable=False)
    caption: Mapped[str] = mapped_column(Text, default="", nullable=False)

    def __repr__(self) -> str:
        return f"<Post(post_id={self.post_id!r}, file_id={self.file_id!r})>"
