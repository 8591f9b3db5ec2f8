"""
PostStore — хранилище опубликованных постов.

Две операции: создать пост и найти по post_id.
Посты не обновляются и не удаляются.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gate_bot.database.models import Post
from gate_bot.errors import PostStoreError


class PostStore:
    """Доступ к таблице постов в рамках одной сессии БД"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post_id: str, file_id: str, caption: str) -> Post:
        """
        Сохраняет новый пост.

        Raises:
            PostStoreError: если запись не удалась (сессия откатывается)
        """
        post = Post(post_id=post_id, file_id=file_id, caption=caption)
        try:
            self.session.add(post)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PostStoreError(f"Failed to save post {post_id}: {e}") from e

        logger.info(f"Post saved: post_id={post_id}, file_id={file_id}")
        return post

    async def get_by_post_id(self, post_id: str) -> Optional[Post]:
        """
        Ищет пост по post_id.

        При коллизии идентификаторов возвращается самый ранний пост.

        Raises:
            PostStoreError: если запрос к БД не удался
        """
        try:
            result = await self.session.execute(
                select(Post)
                .where(Post.post_id == post_id)
                .order_by(Post.id)
                .limit(1)
            )
        except SQLAlchemyError as e:
            raise PostStoreError(f"Failed to look up post {post_id}: {e}") from e

        return result.scalar_one_or_none()
