"""
Services layer
业务逻辑层
"""

from .mood_service import MoodService
from .content_service import ContentRecommender

__all__ = [
    "MoodService",
    "ContentRecommender",
]
