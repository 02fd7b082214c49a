"""
Giphy 随机GIF接口客户端
"""
# 标准库导包
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any

# 项目内部导包
from exceptions import ProviderConfigError
from integrations.content.base import ImageProvider, fetch_json

logger = logging.getLogger(__name__)

GIPHY_DEFAULT_URL = "https://api.giphy.com/v1/gifs/random"
GIPHY_DEFAULT_RATING = "g"


@dataclass
class GiphyConfig:
    """Giphy配置"""
    api_key: Optional[str] = None
    url: str = GIPHY_DEFAULT_URL
    rating: str = GIPHY_DEFAULT_RATING
    timeout: float = 10.0


class GiphyClient(ImageProvider):
    """Giphy客户端，rating固定为配置中的内容分级"""

    name = "giphy"

    def __init__(self, config: GiphyConfig):
        self.config = config

    @classmethod
    def from_settings(cls, settings) -> "GiphyClient":
        """从全局设置创建客户端"""
        config = GiphyConfig(
            api_key=getattr(settings, "GIPHY_API_KEY", None),
            url=getattr(settings, "GIPHY_API_URL", GIPHY_DEFAULT_URL),
            rating=getattr(settings, "GIPHY_RATING", GIPHY_DEFAULT_RATING),
            timeout=getattr(settings, "PROVIDER_TIMEOUT_SECONDS", 10.0),
        )
        return cls(config)

    async def random_gif(self, tag: str) -> Dict[str, Any]:
        if not self.config.api_key:
            raise ProviderConfigError(self.name, "GIPHY_API_KEY未配置")

        logger.info("请求Giphy随机GIF，tag=%s, rating=%s", tag, self.config.rating)
        return await fetch_json(
            self.name,
            self.config.url,
            {
                "api_key": self.config.api_key,
                "tag": tag,
                "rating": self.config.rating,
            },
            self.config.timeout,
        )
