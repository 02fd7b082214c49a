"""
Storage models package.
"""
# 项目内部导包
from .mood_entry import MoodEntry

__all__ = [
    "MoodEntry",
]
