"""
Типизированные ошибки бота
"""


class GateBotError(Exception):
    """Базовая ошибка бота"""


class PostStoreError(GateBotError):
    """Ошибка чтения/записи хранилища постов"""


class PublishError(GateBotError):
    """Не удалось отправить пост в канал"""
