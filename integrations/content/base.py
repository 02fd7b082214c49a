"""
内容提供方接口与HTTP请求封装
"""
# 标准库导包
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any

# 第三方库导包
import aiohttp

# 项目内部导包
from exceptions import ProviderError

logger = logging.getLogger(__name__)


class QuoteProvider(ABC):
    """名言提供方"""

    @abstractmethod
    async def random_quote(self, category: str) -> Dict[str, Any]:
        """按分类获取一条随机名言，原样返回提供方的响应"""


class ImageProvider(ABC):
    """图片提供方"""

    @abstractmethod
    async def random_gif(self, tag: str) -> Dict[str, Any]:
        """按关键词获取一张随机GIF，原样返回提供方的响应"""


async def fetch_json(
    provider: str,
    url: str,
    params: Dict[str, Any],
    timeout: float
) -> Dict[str, Any]:
    """
    发送GET请求并解析JSON响应，不重试

    Args:
        provider: 提供方名称，用于日志和异常
        url: 请求地址
        params: 查询参数
        timeout: 总超时时间（秒）

    Returns:
        响应JSON

    Raises:
        ProviderError: 网络错误、超时、非2xx状态码或响应不是JSON
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url, params=params) as response:
                if response.status >= 400:
                    raise ProviderError(provider, f"HTTP {response.status}")
                return await response.json(content_type=None)
    except asyncio.TimeoutError as e:
        raise ProviderError(provider, f"请求超时（{timeout}s）") from e
    except (aiohttp.ClientError, ValueError) as e:
        raise ProviderError(provider, str(e)) from e
