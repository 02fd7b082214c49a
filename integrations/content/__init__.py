"""
外部内容提供方
名言（Quotable）和GIF（Giphy）客户端
"""
# 项目内部导包
from .base import QuoteProvider, ImageProvider
from .quotable import QuotableClient, QuotableConfig
from .giphy import GiphyClient, GiphyConfig

__all__ = [
    "QuoteProvider",
    "ImageProvider",
    "QuotableClient",
    "QuotableConfig",
    "GiphyClient",
    "GiphyConfig",
]
