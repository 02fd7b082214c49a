"""
基础API路由
包含根路径、健康检查等基础功能
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import HealthResponse
from storage.database import get_session

logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["基础功能"]
)


@router.get("/", summary="服务欢迎信息")
async def root():
    """
    根路径接口

    Returns:
        服务欢迎信息
    """
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
    }


@router.get("/health", response_model=HealthResponse, summary="健康检查")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    健康检查接口

    用于监控服务运行状态，常用于负载均衡器和监控系统
    """
    database = "ok"
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"健康检查数据库不可用: {str(e)}")
        database = "error"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        checks={
            "api": "ok",
            "database": database,
        }
    )
