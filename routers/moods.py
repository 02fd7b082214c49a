"""
心情日记路由
提供当天心情记录、历史查询、删除以及名言/GIF推荐接口
"""
# 标准库导包
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# 第三方库导包
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from exceptions import NotAuthorized, NotFound, ProviderConfigError, ProviderError, ValidationError
from integrations.content import GiphyClient, QuotableClient
from models import MessageResponse, MoodEntryResponse, UserInfo
from routers.services.content_service import ContentRecommender
from routers.services.mood_service import MoodService
from storage.database import get_session
from storage.models.mood_entry import MoodEntry
from utils import get_current_user

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/moods",
    tags=["心情日记"]
)


async def get_mood_service(session: AsyncSession = Depends(get_session)) -> MoodService:
    """心情日记服务依赖"""
    return MoodService(session)


def get_content_recommender() -> ContentRecommender:
    """内容推荐服务依赖"""
    return ContentRecommender(
        quote_provider=QuotableClient.from_settings(settings),
        image_provider=GiphyClient.from_settings(settings)
    )


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


def _entry_to_response(entry: MoodEntry) -> MoodEntryResponse:
    """
    将MoodEntry模型转换为MoodEntryResponse

    Args:
        entry: MoodEntry模型实例

    Returns:
        MoodEntryResponse对象
    """
    return MoodEntryResponse(
        id=entry.id,
        user=entry.user_id,
        date=_as_utc(entry.date),
        mood_rating=entry.mood_rating,
        journal=entry.journal,
        tags=list(entry.tags or []),
        created_at=_as_utc(entry.created_at),
        updated_at=_as_utc(entry.updated_at)
    )


@router.post("", response_model=MoodEntryResponse, summary="创建或更新当天心情记录")
async def record_mood(
    payload: Dict[str, Any] = Body(..., description="{moodRating, journal, tags?}"),
    user_info: UserInfo = Depends(get_current_user),
    mood_service: MoodService = Depends(get_mood_service)
):
    """
    每个用户每天只保留一条记录，同一天再次提交会覆盖评分、日记和标签
    """
    try:
        entry = await mood_service.record_today(
            user_id=user_info.user_id,
            mood_rating=payload.get("moodRating"),
            journal=payload.get("journal"),
            tags=payload.get("tags")
        )
        return _entry_to_response(entry)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"保存心情记录失败: user_id={user_info.user_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("", response_model=List[MoodEntryResponse], summary="获取全部心情记录")
async def list_moods(
    user_info: UserInfo = Depends(get_current_user),
    mood_service: MoodService = Depends(get_mood_service)
):
    """按日期倒序返回当前用户的全部记录"""
    try:
        entries = await mood_service.list_all(user_info.user_id)
        return [_entry_to_response(entry) for entry in entries]

    except Exception as e:
        logger.error(f"获取心情记录失败: user_id={user_info.user_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/range", response_model=List[MoodEntryResponse], summary="按日期范围获取心情记录")
async def list_moods_in_range(
    start_date: Optional[str] = Query(None, alias="startDate", description="开始日期（包含），ISO-8601"),
    end_date: Optional[str] = Query(None, alias="endDate", description="结束日期（包含），ISO-8601"),
    user_info: UserInfo = Depends(get_current_user),
    mood_service: MoodService = Depends(get_mood_service)
):
    """按日期升序返回范围内的记录"""
    try:
        entries = await mood_service.list_range(user_info.user_id, start_date, end_date)
        return [_entry_to_response(entry) for entry in entries]

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"按范围获取心情记录失败: user_id={user_info.user_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/quote/{mood_rating}", summary="获取与心情匹配的名言")
async def get_quote(
    mood_rating: int,
    user_info: UserInfo = Depends(get_current_user),
    recommender: ContentRecommender = Depends(get_content_recommender)
):
    """原样返回名言提供方的响应"""
    try:
        return await recommender.quote_for(mood_rating)

    except ProviderConfigError as e:
        logger.error(f"名言提供方未配置: {str(e)}")
        raise HTTPException(status_code=500, detail="Quote provider is not configured")
    except ProviderError as e:
        logger.error(f"名言接口调用失败: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch quote")


@router.get("/gif/{mood_rating}", summary="获取与心情匹配的GIF")
async def get_gif(
    mood_rating: int,
    user_info: UserInfo = Depends(get_current_user),
    recommender: ContentRecommender = Depends(get_content_recommender)
):
    """原样返回GIF提供方的响应"""
    try:
        return await recommender.gif_for(mood_rating)

    except ProviderConfigError as e:
        logger.error(f"GIF提供方未配置: {str(e)}")
        raise HTTPException(status_code=500, detail="GIF provider is not configured")
    except ProviderError as e:
        logger.error(f"GIF接口调用失败: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch GIF")


@router.get("/{entry_id}", response_model=MoodEntryResponse, summary="获取单条心情记录")
async def get_mood(
    entry_id: str,
    user_info: UserInfo = Depends(get_current_user),
    mood_service: MoodService = Depends(get_mood_service)
):
    try:
        entry = await mood_service.get_by_id(user_info.user_id, entry_id)
        return _entry_to_response(entry)

    except NotFound:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    except NotAuthorized:
        raise HTTPException(status_code=401, detail="User not authorized")
    except Exception as e:
        logger.error(f"获取心情记录失败: entry_id={entry_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.delete("/{entry_id}", response_model=MessageResponse, summary="删除心情记录")
async def delete_mood(
    entry_id: str,
    user_info: UserInfo = Depends(get_current_user),
    mood_service: MoodService = Depends(get_mood_service)
):
    try:
        message = await mood_service.delete_by_id(user_info.user_id, entry_id)
        return MessageResponse(message=message)

    except NotFound:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    except NotAuthorized:
        raise HTTPException(status_code=401, detail="User not authorized")
    except Exception as e:
        logger.error(f"删除心情记录失败: entry_id={entry_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Server error")
