"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .mood_entry_repository import MoodEntryRepository

__all__ = [
    "BaseRepository",
    "MoodEntryRepository",
]
