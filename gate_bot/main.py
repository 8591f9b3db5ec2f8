"""
Gate Bot - Главный файл бота
Выдача файлов подписчикам каналов и публикация постов админом
"""
import asyncio
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from shared.config.settings import settings
from shared.utils.logger import setup_logger
from shared.database.base import init_db, engine
from gate_bot.access.gate import AccessGate
from gate_bot.authoring.flow import AuthoringFlow
from gate_bot.database import Post  # noqa: F401  (регистрация модели для init_db)
from gate_bot.handlers import start_router, callbacks_router, admin_router, on_error


# Настраиваем логгер
logger = setup_logger("gate_bot", settings.log_level)


def build_dispatcher(bot: Bot) -> Dispatcher:
    """Диспетчер с роутерами и зависимостями для хендлеров"""
    # FSM: черновик админа хранится по его ID
    storage = MemoryStorage()
    dp = Dispatcher(storage=storage)

    dp["access_gate"] = AccessGate(
        bot=bot,
        channels=settings.channels,
        external_profile_url=settings.external_profile_url,
    )
    dp["authoring_flow"] = AuthoringFlow(
        bot=bot,
        publish_channel=settings.publish_target,
    )

    # admin_router последним — /start должен срабатывать и при открытом черновике
    dp.include_router(start_router)
    dp.include_router(callbacks_router)
    dp.include_router(admin_router)

    dp.errors.register(on_error)

    return dp


async def main():
    """Главная функция запуска бота"""

    logger.info("🚀 Starting Gate Bot...")

    logger.info("Initializing database...")
    await init_db()
    logger.info("✅ Database initialized")

    bot = Bot(token=settings.bot_token)
    dp = build_dispatcher(bot)

    logger.info("✅ Handlers registered")

    try:
        logger.info("🤖 Gate Bot is running!")
        logger.info(f"Channels: {[c.username for c in settings.channels]}")
        logger.info(f"Publish channel: {settings.publish_target}")
        logger.info(f"Admin: {settings.admin_chat_id}")

        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()
        await engine.dispose()
        logger.info("👋 Gate Bot stopped")


def run():
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
