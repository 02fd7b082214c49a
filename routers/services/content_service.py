"""
内容推荐服务
根据心情评分选择名言分类和GIF关键词，并调用外部提供方
"""
# 标准库导包
import logging
from typing import Dict, Any

# 项目内部导包
from integrations.content import ImageProvider, QuoteProvider

logger = logging.getLogger(__name__)

# 评分 -> GIF关键词
GIF_SEARCH_TERMS = {
    1: "cheer up",
    2: "smile",
    3: "content",
    4: "happy",
    5: "excited",
}
DEFAULT_GIF_SEARCH_TERM = "happy"


def quote_category(mood_rating: int) -> str:
    """评分<=2用励志类名言，其余用鼓舞类"""
    if mood_rating <= 2:
        return "motivational"
    return "inspirational"


def gif_search_term(mood_rating: int) -> str:
    return GIF_SEARCH_TERMS.get(mood_rating, DEFAULT_GIF_SEARCH_TERM)


class ContentRecommender:
    """内容推荐服务，无状态，不访问数据库"""

    def __init__(self, quote_provider: QuoteProvider, image_provider: ImageProvider):
        self.quote_provider = quote_provider
        self.image_provider = image_provider

    async def quote_for(self, mood_rating: int) -> Dict[str, Any]:
        """
        获取与心情匹配的名言

        Raises:
            ProviderError: 提供方调用失败或超时
        """
        category = quote_category(mood_rating)
        logger.debug(f"名言分类: mood_rating={mood_rating}, category={category}")
        return await self.quote_provider.random_quote(category)

    async def gif_for(self, mood_rating: int) -> Dict[str, Any]:
        """
        获取与心情匹配的GIF

        Raises:
            ProviderError: 提供方调用失败、超时或未配置
        """
        term = gif_search_term(mood_rating)
        logger.debug(f"GIF关键词: mood_rating={mood_rating}, tag={term}")
        return await self.image_provider.random_gif(term)
