"""
测试公共fixture
使用SQLite内存库（aiosqlite + StaticPool），每个测试独立建表
"""
# 标准库导包
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

# 必须在导入项目模块之前设置，避免创建MySQL引擎
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("POD_ENV", "test")

# 第三方库导包
import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# 项目内部导包
from integrations.content import ImageProvider, QuoteProvider
from main import app
from routers.moods import get_content_recommender, get_mood_service
from routers.services.content_service import ContentRecommender
from routers.services.mood_service import MoodService
from storage.database import Base
import storage.models  # noqa: F401


class FakeClock:
    """可手动拨动的时钟"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeQuoteProvider(QuoteProvider):
    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.payload = payload or {"content": "Keep going.", "author": "Someone"}
        self.error = error
        self.categories: List[str] = []

    async def random_quote(self, category: str) -> Dict[str, Any]:
        self.categories.append(category)
        if self.error:
            raise self.error
        return self.payload


class FakeImageProvider(ImageProvider):
    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.payload = payload or {"data": {"id": "abc", "url": "https://giphy.example/abc"}}
        self.error = error
        self.tags: List[str] = []

    async def random_gif(self, tag: str) -> Dict[str, Any]:
        self.tags.append(tag)
        if self.error:
            raise self.error
        return self.payload


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 10, 9, 0, 0))


@pytest.fixture
def mood_service(session, clock):
    return MoodService(session, clock=clock)


@pytest.fixture
def quote_provider():
    return FakeQuoteProvider()


@pytest.fixture
def image_provider():
    return FakeImageProvider()


@pytest.fixture
def recommender(quote_provider, image_provider):
    return ContentRecommender(quote_provider, image_provider)


@pytest_asyncio.fixture
async def client(session_factory, clock, recommender):
    """驱动FastAPI应用的HTTP客户端，替换数据库会话、时钟和内容提供方"""

    async def override_mood_service():
        async with session_factory() as session:
            yield MoodService(session, clock=clock)

    app.dependency_overrides[get_mood_service] = override_mood_service
    app.dependency_overrides[get_content_recommender] = lambda: recommender

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
