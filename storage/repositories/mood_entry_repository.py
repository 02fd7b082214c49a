"""
MoodEntryRepository - 心情日记Repository
"""
# 标准库导包
import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Any

# 第三方库导包
from sqlalchemy import select, and_
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from exceptions import ConflictError, StoreError
from storage.models.mood_entry import MoodEntry
from storage.repositories.base import BaseRepository

# 配置日志
logger = logging.getLogger(__name__)

# 一个分桶窗口的长度
DAY = timedelta(days=1)

# 唯一约束对应的列
UNIQUE_KEY = ("user_id", "date")


class MoodEntryRepository(BaseRepository[MoodEntry]):
    """心情日记Repository，负责 (user_id, date) 唯一约束下的读写"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, MoodEntry)

    async def find_by_user_and_day(self, user_id: str, day_start: datetime) -> Optional[MoodEntry]:
        """
        查找用户在 [day_start, day_start + 24h) 窗口内的记录

        Args:
            user_id: 用户ID
            day_start: 当天零点（UTC）

        Returns:
            MoodEntry实例或None
        """
        entries = await self.query_by_filters(
            filters={
                "user_id": user_id,
                "date": {"gte": day_start, "lt": day_start + DAY}
            },
            limit=1
        )
        return entries[0] if entries else None

    async def find_all_by_user(self, user_id: str) -> List[MoodEntry]:
        """获取用户全部记录，按日期降序"""
        return await self.query_by_filters(
            filters={"user_id": user_id},
            order_by="date",
            order_desc=True
        )

    async def find_by_date_range(
        self,
        user_id: str,
        start_time: datetime,
        end_time: datetime
    ) -> List[MoodEntry]:
        """
        根据日期范围获取记录，两端均包含

        Args:
            user_id: 用户ID
            start_time: 开始时间
            end_time: 结束时间

        Returns:
            记录列表（按日期升序）
        """
        return await self.query_by_filters(
            filters={
                "user_id": user_id,
                "date": {"gte": start_time, "lte": end_time}
            },
            order_by="date",
            order_desc=False
        )

    async def upsert_for_day(
        self,
        user_id: str,
        day_start: datetime,
        mood_rating: int,
        journal: str,
        tags: List[str]
    ) -> MoodEntry:
        """
        原子upsert：当天无记录则创建，有则整体替换 mood_rating/journal/tags

        优先使用数据库原生的upsert语句，由唯一约束保证并发写入只留下一条记录；
        不支持的数据库退回到 查询-插入，插入冲突时转为更新。

        Args:
            user_id: 用户ID
            day_start: 当天零点（UTC）
            mood_rating: 心情评分
            journal: 日记内容
            tags: 标签列表

        Returns:
            写入后的MoodEntry实例
        """
        now = datetime.utcnow()
        changes = {
            "mood_rating": mood_rating,
            "journal": journal,
            "tags": list(tags),
            "updated_at": now,
        }
        values = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "date": day_start,
            "created_at": now,
            **changes,
        }

        dialect = self.session.get_bind().dialect.name
        statement = self._native_upsert(dialect, values, changes)

        if statement is None:
            return await self._upsert_with_retry(user_id, day_start, values, changes)

        try:
            await self.session.execute(statement)
            result = await self.session.execute(
                select(MoodEntry)
                .where(and_(MoodEntry.user_id == user_id, MoodEntry.date == day_start))
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            logger.error(f"upsert心情记录失败: user_id={user_id}, date={day_start}, error={str(e)}")
            raise StoreError("upsert心情记录失败") from e
        return result.scalar_one()

    def _native_upsert(self, dialect: str, values: Dict[str, Any], changes: Dict[str, Any]):
        """构造对应数据库的upsert语句，不支持时返回None"""
        table = MoodEntry.__table__

        if dialect in ("mysql", "mariadb"):
            return mysql.insert(table).values(**values).on_duplicate_key_update(**changes)

        if dialect == "sqlite":
            return sqlite.insert(table).values(**values).on_conflict_do_update(
                index_elements=list(UNIQUE_KEY),
                set_=changes
            )

        if dialect == "postgresql":
            return postgresql.insert(table).values(**values).on_conflict_do_update(
                index_elements=list(UNIQUE_KEY),
                set_=changes
            )

        return None

    async def _upsert_with_retry(
        self,
        user_id: str,
        day_start: datetime,
        values: Dict[str, Any],
        changes: Dict[str, Any]
    ) -> MoodEntry:
        """查询-插入的兜底实现，插入输给并发写入时改为更新已存在的记录"""
        entry = await self.find_by_user_and_day(user_id, day_start)

        if entry is None:
            try:
                async with self.session.begin_nested():
                    return await self.create(**values)
            except ConflictError:
                logger.warning(f"当天记录已被并发创建，转为更新: user_id={user_id}, date={day_start}")
                entry = await self.find_by_user_and_day(user_id, day_start)
                if entry is None:
                    raise

        for key, value in changes.items():
            setattr(entry, key, value)

        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            raise StoreError("更新心情记录失败") from e
        return entry
