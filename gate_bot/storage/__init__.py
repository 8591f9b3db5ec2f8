"""
Хранилище постов
"""
from .post_store import PostStore

__all__ = ["PostStore"]
