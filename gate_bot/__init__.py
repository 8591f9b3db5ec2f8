"""
Gate Bot — выдача файлов подписчикам каналов и публикация постов админом
"""
