"""Tests for cache-first fetching."""

import pytest

from feedstack.cache import TTLCache
from feedstack.repositories import NewsApiError
from feedstack.services import ArticleCache, NewsService

from .conftest import FakeNewsSource, make_articles


@pytest.fixture
def service(cache, news_source) -> NewsService:
    return NewsService(source=news_source, article_cache=ArticleCache(cache))


@pytest.mark.asyncio
async def test_headlines_fetch_then_cache_hit(service, news_source, articles, clock):
    first = await service.get_top_headlines("us", "technology")
    assert first.cached is False
    assert first.articles == articles
    assert first.total_results == 30
    assert first.last_updated == clock.now

    clock.advance(1000)
    second = await service.get_top_headlines("us", "technology", "")
    assert second.cached is True
    assert second.articles == articles
    assert second.last_updated == clock.now - 1000

    assert len(news_source.headline_calls) == 1
    assert news_source.headline_calls[0] == {"country": "us", "category": "technology", "q": None}


@pytest.mark.asyncio
async def test_headlines_refetch_after_expiry(service, news_source, cache, clock):
    await service.get_top_headlines("us", "technology")
    clock.advance(cache.default_duration + 1)

    result = await service.get_top_headlines("us", "technology")
    assert result.cached is False
    assert len(news_source.headline_calls) == 2


@pytest.mark.asyncio
async def test_force_refresh_skips_cache(service, news_source):
    await service.get_top_headlines("us", "technology")
    result = await service.get_top_headlines("us", "technology", force_refresh=True)

    assert result.cached is False
    assert len(news_source.headline_calls) == 2


@pytest.mark.asyncio
async def test_search_fetch_then_cache_hit(service, news_source):
    first = await service.search("ai", "en", "relevancy")
    second = await service.search("ai", "en", "relevancy")

    assert first.cached is False
    assert second.cached is True
    assert news_source.search_calls == [{"q": "ai", "language": "en", "sort_by": "relevancy"}]


@pytest.mark.asyncio
async def test_upstream_error_propagates_and_caches_nothing(cache, failing_news_source):
    service = NewsService(source=failing_news_source, article_cache=ArticleCache(cache))

    with pytest.raises(NewsApiError):
        await service.get_top_headlines("us", "technology")
    assert await cache.get_metadata() == {}


@pytest.mark.asyncio
async def test_write_back_enforces_size_budget(store, clock):
    cache = TTLCache(store, max_size=6_000, clock=clock)
    source = FakeNewsSource(make_articles(8))
    service = NewsService(source=source, article_cache=ArticleCache(cache))

    for category in ("business", "health", "science", "sports"):
        await service.get_top_headlines("us", category)
        clock.advance(1)

    assert await cache.get_size() <= 6_000
    remaining = await cache.get_metadata()
    assert ArticleCache.top_headlines_key("us", "sports", None) in remaining
    assert ArticleCache.top_headlines_key("us", "business", None) not in remaining


@pytest.mark.asyncio
async def test_last_updated_comes_from_the_write(store, clock):
    # Budget smaller than one response: the write-back is evicted straight away
    cache = TTLCache(store, max_size=100, clock=clock)
    service = NewsService(source=FakeNewsSource(make_articles(3)), article_cache=ArticleCache(cache))

    result = await service.search("ai", "en", "relevancy")

    assert result.cached is False
    assert result.last_updated == clock.now
    assert await cache.get_metadata() == {}
