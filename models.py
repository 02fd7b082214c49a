"""
数据模型定义
请求校验DTO和响应模型，与HTTP层解耦，服务层直接构造
"""
# 标准库导包
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

# 第三方库导包
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

# 项目内部导包
from exceptions import ValidationError

# 各字段校验失败时返回给调用方的提示
FIELD_MESSAGES = {
    "moodRating": "Invalid moodRating. Must be a number between 1 and 5.",
    "journal": "Journal is required and must be a non-empty string up to 500 characters.",
    "tags": "Tags must be an array of strings.",
    "startDate": "Invalid startDate. Must be a valid date.",
    "endDate": "Invalid endDate. Must be a valid date.",
}

JOURNAL_MAX_LENGTH = 500


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """将pydantic的校验异常转换为业务ValidationError，取第一个出错字段"""
    error = exc.errors()[0]
    loc = error.get("loc") or ("body",)
    field = str(loc[0])
    return ValidationError(field, FIELD_MESSAGES.get(field, error.get("msg", "Invalid input")))


class UserInfo(BaseModel):
    """用户信息模型，由认证依赖注入"""
    user_id: str
    name: Optional[str] = None


# ========== Mood模块相关模型 ==========

class MoodEntryInput(BaseModel):
    """当天心情记录的输入校验模型"""
    model_config = ConfigDict(populate_by_name=True)

    mood_rating: int = Field(..., alias="moodRating", strict=True, ge=1, le=5)
    journal: StrictStr = Field(..., max_length=JOURNAL_MAX_LENGTH)
    tags: Optional[List[StrictStr]] = None

    @field_validator("journal")
    @classmethod
    def journal_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("journal must not be blank")
        return value

    @classmethod
    def build(cls, mood_rating: Any, journal: Any, tags: Any = None) -> "MoodEntryInput":
        """
        从原始值构造并校验

        Raises:
            ValidationError: 字段不合法，field为对外字段名
        """
        try:
            return cls.model_validate({
                "moodRating": mood_rating,
                "journal": journal,
                "tags": tags,
            })
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    @property
    def tag_list(self) -> List[str]:
        return list(self.tags or [])


class MoodRangeQuery(BaseModel):
    """日期范围查询参数，统一转换为UTC的naive datetime"""
    model_config = ConfigDict(populate_by_name=True)

    start_date: datetime = Field(..., alias="startDate")
    end_date: datetime = Field(..., alias="endDate")

    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @classmethod
    def build(cls, start_date: Any, end_date: Any) -> "MoodRangeQuery":
        """
        从查询字符串构造并校验

        Raises:
            ValidationError: 日期无法解析
        """
        try:
            return cls.model_validate({"startDate": start_date, "endDate": end_date})
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e


class MoodEntryResponse(BaseModel):
    """心情记录响应模型"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user: str
    date: datetime
    mood_rating: int = Field(..., alias="moodRating")
    journal: str
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class MessageResponse(BaseModel):
    """简单消息响应模型"""
    message: str


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    status: str
    service: str
    version: str
    checks: Dict[str, str]
