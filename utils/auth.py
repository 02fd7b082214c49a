"""
认证工具
上游认证层解析出用户后通过 X-User-Id 透传，这里只负责读取
"""
# 标准库导包
from typing import Optional

# 第三方库导包
from fastapi import Header, HTTPException

# 项目内部导包
from config import settings
from models import UserInfo


async def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> UserInfo:
    """
    获取当前用户

    未携带X-User-Id时，如果配置了AUTH_MOCK_USER_ID（仅开发环境）则返回mock用户，
    否则返回401

    Args:
        x_user_id: X-User-Id header值

    Returns:
        UserInfo对象
    """
    if x_user_id and x_user_id.strip():
        return UserInfo(user_id=x_user_id.strip())

    if settings.AUTH_MOCK_USER_ID:
        return UserInfo(user_id=settings.AUTH_MOCK_USER_ID, name="Mock User")

    raise HTTPException(status_code=401, detail="Unauthorized")
