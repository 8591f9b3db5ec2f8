"""
Настройка логирования для всего проекта
"""
import sys
from loguru import logger
from pathlib import Path


def setup_logger(bot_name: str, log_level: str = "INFO", log_dir: Path = Path("logs")):
    """
    Настраивает логгер для бота

    Args:
        bot_name: Имя бота (используется в именах файлов логов)
        log_level: Уровень логирования (DEBUG, INFO, WARNING, ERROR)
        log_dir: Директория для файлов логов
    """

    # Удаляем стандартный handler
    logger.remove()

    log_dir.mkdir(parents=True, exist_ok=True)

    # Консольный вывод с цветами
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True
    )

    # Файловый вывод
    logger.add(
        log_dir / f"{bot_name}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level=log_level,
        rotation="10 MB",  # Ротация при достижении 10MB
        retention="1 week",
        compression="zip"
    )

    # Отдельный файл для ошибок
    logger.add(
        log_dir / f"{bot_name}_errors.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="ERROR",
        rotation="10 MB",
        retention="1 month",
        compression="zip"
    )

    logger.info(f"Logger initialized for {bot_name}")

    return logger
