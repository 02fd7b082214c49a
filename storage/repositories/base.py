"""
基础Repository类
"""
# 标准库导包
import logging
from typing import TypeVar, Generic, Optional, List, Dict, Any
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# 项目内部导包
from exceptions import ConflictError, NotFound, StoreError
from storage.database import Base

# 配置日志
logger = logging.getLogger(__name__)

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供通用的CRUD操作

    SQLAlchemy异常统一转换为StoreError，唯一约束冲突转换为ConflictError
    """

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        根据ID获取单条记录

        Args:
            id: 记录ID

        Returns:
            模型实例或None
        """
        try:
            result = await self.session.execute(
                select(self.model).where(self.model.id == id)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"查询{self.model.__name__}失败: id={id}") from e
        return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, id: str) -> ModelType:
        """根据ID获取记录，不存在时抛出NotFound"""
        instance = await self.get_by_id(id)
        if instance is None:
            raise NotFound(id)
        return instance

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例

        Raises:
            ConflictError: 违反唯一约束
            StoreError: 其他持久化错误
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"{self.model.__name__}唯一约束冲突") from e
        except SQLAlchemyError as e:
            raise StoreError(f"创建{self.model.__name__}失败") from e
        await self.session.refresh(instance)
        return instance

    async def delete_by_id(self, id: str) -> bool:
        """
        根据ID删除记录

        Args:
            id: 记录ID

        Returns:
            是否删除成功
        """
        try:
            result = await self.session.execute(
                delete(self.model).where(self.model.id == id)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"删除{self.model.__name__}失败: id={id}") from e
        return result.rowcount > 0

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        构建过滤条件

        Args:
            filters: 过滤条件字典，值为dict时表示范围条件（gte/lt/lte）

        Returns:
            条件列表

        Raises:
            ValueError: 不支持的范围操作符
        """
        conditions = []

        for key, value in filters.items():
            column = getattr(self.model, key)

            if isinstance(value, dict):
                # 范围条件
                for op, val in value.items():
                    if op == 'gte':
                        conditions.append(column >= val)
                    elif op == 'lt':
                        conditions.append(column < val)
                    elif op == 'lte':
                        conditions.append(column <= val)
                    else:
                        raise ValueError(f"不支持的过滤操作符: {op}")
            else:
                # 等于条件
                conditions.append(column == value)

        return conditions

    async def query_by_filters(
        self,
        filters: Dict[str, Any],
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True
    ) -> List[ModelType]:
        """
        根据过滤条件查询记录

        Args:
            filters: 过滤条件字典
            limit: 限制返回数量
            order_by: 排序字段
            order_desc: 是否降序

        Returns:
            模型实例列表
        """
        conditions = self._build_filter_conditions(filters)
        query = select(self.model)

        if conditions:
            query = query.where(and_(*conditions))

        if order_by and hasattr(self.model, order_by):
            column = getattr(self.model, order_by)
            if order_desc:
                query = query.order_by(column.desc())
            else:
                query = query.order_by(column.asc())

        if limit:
            query = query.limit(limit)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"查询{self.model.__name__}失败: filters={filters}, error={str(e)}")
            raise StoreError(f"查询{self.model.__name__}失败") from e
        return list(result.scalars().all())
