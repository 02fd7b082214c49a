"""
MoodEntry模型 - 心情日记表
"""
# 标准库导包
import uuid
from datetime import datetime
from typing import List

# 第三方库导包
from sqlalchemy import String, Text, Integer, DateTime, JSON, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base


class MoodEntry(Base):
    """心情日记表，每个用户每天最多一条"""

    __tablename__ = "mood_entries"

    # 核心字段
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, comment="UTC零点，按天分桶的键")
    mood_rating: Mapped[int] = mapped_column(Integer, nullable=False, comment="1: 非常难过 ... 5: 非常开心")
    journal: Mapped[str] = mapped_column(Text, nullable=False, comment="日记内容，最多500字")
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 同一用户同一天只允许一条记录
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_mood_entries_user_date"),
        CheckConstraint("mood_rating BETWEEN 1 AND 5", name="ck_mood_entries_rating"),
    )

    def __repr__(self):
        return f"<MoodEntry(id={self.id}, user_id={self.user_id}, date={self.date}, mood_rating={self.mood_rating})>"
