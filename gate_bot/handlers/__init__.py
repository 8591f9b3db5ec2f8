"""
Обработчики команд и callback для Gate Bot
"""
from gate_bot.handlers.start import router as start_router
from gate_bot.handlers.callbacks import router as callbacks_router
from gate_bot.handlers.admin import router as admin_router
from gate_bot.handlers.errors import on_error

__all__ = ["start_router", "callbacks_router", "admin_router", "on_error"]
