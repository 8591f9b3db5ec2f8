"""
Единый обработчик необработанных ошибок в хендлерах
"""
from aiogram.types import ErrorEvent
from loguru import logger


async def on_error(event: ErrorEvent) -> bool:
    """Логирует ошибку вместе с update, чтобы polling не падал"""
    update_id = event.update.update_id if event.update else None
    logger.opt(exception=event.exception).error(
        f"Unhandled error in update {update_id}: {event.exception}"
    )
    return True
