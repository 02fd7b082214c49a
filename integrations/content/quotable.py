"""
Quotable 名言接口客户端
"""
# 标准库导包
import logging
from dataclasses import dataclass
from typing import Dict, Any

# 项目内部导包
from integrations.content.base import QuoteProvider, fetch_json

logger = logging.getLogger(__name__)

QUOTABLE_DEFAULT_URL = "https://api.quotable.io/random"


@dataclass
class QuotableConfig:
    """Quotable配置"""
    url: str = QUOTABLE_DEFAULT_URL
    timeout: float = 10.0


class QuotableClient(QuoteProvider):
    """Quotable客户端"""

    name = "quotable"

    def __init__(self, config: QuotableConfig):
        self.config = config

    @classmethod
    def from_settings(cls, settings) -> "QuotableClient":
        """从全局设置创建客户端"""
        config = QuotableConfig(
            url=getattr(settings, "QUOTE_API_URL", QUOTABLE_DEFAULT_URL),
            timeout=getattr(settings, "PROVIDER_TIMEOUT_SECONDS", 10.0),
        )
        return cls(config)

    async def random_quote(self, category: str) -> Dict[str, Any]:
        logger.info("请求Quotable随机名言，category=%s", category)
        return await fetch_json(
            self.name,
            self.config.url,
            {"tags": category},
            self.config.timeout,
        )
