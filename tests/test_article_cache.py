"""Tests for the article cache helpers."""

import pytest

from feedstack.services import ArticleCache


@pytest.fixture
def article_cache(cache) -> ArticleCache:
    return ArticleCache(cache)


@pytest.mark.asyncio
async def test_top_headlines_round_trip(article_cache, articles):
    await article_cache.cache_top_headlines("us", "technology", None, articles)

    cached = await article_cache.get_top_headlines("us", "technology", None)
    assert cached == articles


@pytest.mark.asyncio
async def test_top_headlines_empty_query_hits_none_query(article_cache, articles):
    await article_cache.cache_top_headlines("us", "technology", None, articles)
    assert await article_cache.get_top_headlines("us", "technology", "") == articles


@pytest.mark.asyncio
async def test_top_headlines_other_category_misses(article_cache, articles):
    await article_cache.cache_top_headlines("us", "technology", None, articles)
    assert await article_cache.get_top_headlines("us", "sports", None) is None


@pytest.mark.asyncio
async def test_search_round_trip(article_cache, articles):
    await article_cache.cache_search("ai", "en", "relevancy", articles)

    assert await article_cache.get_search("ai", "en", "relevancy") == articles
    assert await article_cache.get_search("ai", "fr", "relevancy") is None


@pytest.mark.asyncio
async def test_stored_payload_uses_upstream_field_names(article_cache, store, articles):
    await article_cache.cache_search("ai", "en", "relevancy", articles)
    raw = await store.get_item(ArticleCache.search_key("ai", "en", "relevancy"))
    assert '"urlToImage"' in raw
    assert '"publishedAt"' in raw


@pytest.mark.asyncio
async def test_cache_timestamp(article_cache, articles, clock):
    assert await article_cache.get_cache_timestamp("us", "general", None) is None

    await article_cache.cache_top_headlines("us", "general", None, articles)
    assert await article_cache.get_cache_timestamp("us", "general", "") == clock.now


@pytest.mark.asyncio
async def test_search_timestamp(article_cache, articles, clock):
    await article_cache.cache_search("ai", "en", "relevancy", articles)
    assert await article_cache.get_search_timestamp("ai", "en", "relevancy") == clock.now


@pytest.mark.asyncio
async def test_expired_headlines_miss(article_cache, articles, clock, cache):
    await article_cache.cache_top_headlines("us", "general", None, articles, duration=1000)
    clock.advance(1001)

    assert await article_cache.get_top_headlines("us", "general", None) is None
    assert await cache.get_metadata() == {}


@pytest.mark.asyncio
async def test_invalid_payload_is_a_miss(article_cache, cache):
    key = ArticleCache.top_headlines_key("us", "general", None)
    await cache.set(key, [{"title": "missing everything else"}])

    assert await article_cache.get_top_headlines("us", "general", None) is None


@pytest.mark.asyncio
async def test_entry_accessor_returns_articles_and_timestamp(article_cache, articles, clock):
    await article_cache.cache_top_headlines("gb", "science", "mars", articles)

    entry = await article_cache.get_top_headlines_entry("gb", "science", "mars")
    assert entry.data == articles
    assert entry.timestamp == clock.now


@pytest.mark.asyncio
async def test_writes_return_their_timestamp(article_cache, articles, clock):
    assert await article_cache.cache_top_headlines("us", "general", None, articles) == clock.now
    assert await article_cache.cache_search("ai", "en", "relevancy", articles, duration=0) is None
