"""
心情日记服务类
处理当天记录的upsert、查询、删除以及归属校验
"""
# 标准库导包
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

# 第三方库导包
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from exceptions import NotAuthorized, StoreError
from models import MoodEntryInput, MoodRangeQuery
from storage.models.mood_entry import MoodEntry
from storage.repositories.mood_entry_repository import MoodEntryRepository

# 配置日志
logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Mood entry removed"


def day_start(moment: datetime) -> datetime:
    """截断到当天零点"""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


class MoodService:
    """心情日记服务类

    时间一律按UTC处理，写入时的分桶日期由服务端时钟决定，不接受客户端传入
    """

    def __init__(self, session: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        """
        初始化心情日记服务

        Args:
            session: 数据库会话
            clock: 返回当前UTC时间的函数，默认 datetime.utcnow
        """
        self.session = session
        self.mood_repo = MoodEntryRepository(session)
        self.clock = clock or datetime.utcnow

    async def record_today(
        self,
        user_id: str,
        mood_rating: Any,
        journal: Any,
        tags: Any = None
    ) -> MoodEntry:
        """
        创建或更新当天的心情记录

        Args:
            user_id: 用户ID
            mood_rating: 心情评分，1-5的整数
            journal: 日记内容
            tags: 标签列表，可选

        Returns:
            写入后的MoodEntry（无法区分是新建还是更新）

        Raises:
            ValidationError: 输入不合法
            StoreError: 持久化失败
        """
        data = MoodEntryInput.build(mood_rating, journal, tags)
        today = day_start(self.clock())

        entry = await self.mood_repo.upsert_for_day(
            user_id=user_id,
            day_start=today,
            mood_rating=data.mood_rating,
            journal=data.journal,
            tags=data.tag_list
        )
        await self._commit()

        logger.info(f"保存心情记录成功: entry_id={entry.id}, user_id={user_id}, date={today.date()}, mood_rating={entry.mood_rating}")
        return entry

    async def list_all(self, user_id: str) -> List[MoodEntry]:
        """获取用户全部记录（按日期倒序）"""
        return await self.mood_repo.find_all_by_user(user_id)

    async def list_range(self, user_id: str, start_date: Any, end_date: Any) -> List[MoodEntry]:
        """
        获取日期范围内的记录

        Args:
            user_id: 用户ID
            start_date: 开始日期（包含）
            end_date: 结束日期（包含）

        Returns:
            记录列表（按日期升序）

        Raises:
            ValidationError: 日期无法解析
        """
        query = MoodRangeQuery.build(start_date, end_date)

        if query.start_date > query.end_date:
            return []

        return await self.mood_repo.find_by_date_range(
            user_id=user_id,
            start_time=query.start_date,
            end_time=query.end_date
        )

    async def get_by_id(self, user_id: str, entry_id: str) -> MoodEntry:
        """
        获取单条记录，先校验存在再校验归属

        Raises:
            NotFound: 记录不存在
            NotAuthorized: 记录不属于当前用户
        """
        entry = await self.mood_repo.get_by_id_or_raise(entry_id)

        if entry.user_id != user_id:
            logger.warning(f"拒绝访问他人的心情记录: entry_id={entry_id}, user_id={user_id}")
            raise NotAuthorized(entry_id, user_id)

        return entry

    async def delete_by_id(self, user_id: str, entry_id: str) -> str:
        """
        删除记录，校验规则同 get_by_id

        Returns:
            确认信息
        """
        await self.get_by_id(user_id, entry_id)

        await self.mood_repo.delete_by_id(entry_id)
        await self._commit()

        logger.info(f"删除心情记录成功: entry_id={entry_id}, user_id={user_id}")
        return DELETE_CONFIRMATION

    async def _commit(self):
        """提交事务，失败时回滚并转换为StoreError"""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("提交事务失败") from e
