"""
Создание постов админом
"""
from .draft import Draft, PostAuthoring, apply_event, missing_fields
from .flow import AuthoringFlow, PublishResult, PublishStatus

__all__ = [
    "Draft",
    "PostAuthoring",
    "apply_event",
    "missing_fields",
    "AuthoringFlow",
    "PublishResult",
    "PublishStatus",
]
