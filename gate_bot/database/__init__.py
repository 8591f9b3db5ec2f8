"""Database models for Gate Bot."""

from .models import Post

__all__ = ["Post"]
