"""
业务异常定义
服务层和存储层抛出，由路由层转换为HTTP响应
"""
# 标准库导包
from typing import Optional


class MoodJournalError(Exception):
    """心情日记服务的异常基类"""


class ValidationError(MoodJournalError):
    """输入校验失败，field为出错的字段名（对外名称，如moodRating）"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class NotFound(MoodJournalError):
    """记录不存在"""

    def __init__(self, entry_id: str):
        super().__init__(f"Mood entry not found: {entry_id}")
        self.entry_id = entry_id


class NotAuthorized(MoodJournalError):
    """记录存在但不属于当前用户"""

    def __init__(self, entry_id: str, user_id: str):
        super().__init__(f"User {user_id} does not own mood entry {entry_id}")
        self.entry_id = entry_id
        self.user_id = user_id


class StoreError(MoodJournalError):
    """通用持久化错误"""


class ConflictError(StoreError):
    """(user_id, date) 唯一约束冲突，正常情况下由upsert内部消化"""


class ProviderError(MoodJournalError):
    """外部内容提供方（名言/GIF）调用失败或超时"""

    def __init__(self, provider: str, message: Optional[str] = None):
        super().__init__(f"{provider}: {message}" if message else provider)
        self.provider = provider


class ProviderConfigError(ProviderError):
    """外部内容提供方缺少必要配置（如API key）"""
