"""
ContentRecommender 测试：评分到名言分类/GIF关键词的映射
"""
# 第三方库导包
import pytest

# 项目内部导包
from exceptions import ProviderError
from routers.services.content_service import gif_search_term, quote_category


@pytest.mark.parametrize(
    "rating, category",
    [(1, "motivational"), (2, "motivational"), (3, "inspirational"), (4, "inspirational"), (5, "inspirational")]
)
def test_quote_category(rating, category):
    assert quote_category(rating) == category


@pytest.mark.parametrize(
    "rating, term",
    [(1, "cheer up"), (2, "smile"), (3, "content"), (4, "happy"), (5, "excited"), (99, "happy"), (0, "happy")]
)
def test_gif_search_term(rating, term):
    assert gif_search_term(rating) == term


async def test_quote_for_low_mood_asks_for_motivational(recommender, quote_provider):
    payload = await recommender.quote_for(1)

    assert quote_provider.categories == ["motivational"]
    assert payload is quote_provider.payload


async def test_quote_for_high_mood_asks_for_inspirational(recommender, quote_provider):
    await recommender.quote_for(5)

    assert quote_provider.categories == ["inspirational"]


async def test_gif_for_uses_search_term_table(recommender, image_provider):
    payload = await recommender.gif_for(2)
    await recommender.gif_for(99)

    assert image_provider.tags == ["smile", "happy"]
    assert payload is image_provider.payload


async def test_provider_errors_propagate_without_retry(recommender, quote_provider):
    quote_provider.error = ProviderError("quotable", "timeout")

    with pytest.raises(ProviderError):
        await recommender.quote_for(3)

    assert quote_provider.categories == ["inspirational"]
