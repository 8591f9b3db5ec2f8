"""
Вспомогательные функции Gate Bot
"""
