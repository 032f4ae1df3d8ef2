"""Shared pytest fixtures for the feedstack test suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from feedstack.cache import TTLCache
from feedstack.models import Article, ArticleSource, NewsApiResponse
from feedstack.repositories import InMemoryKeyValueStore, NewsApiError
from feedstack.storage import JsonStorage

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FailingStore:
    """KeyValueStore whose every call fails like an unreachable backend."""

    def __init__(self) -> None:
        self.calls = 0

    def _fail(self) -> None:
        self.calls += 1
        raise ConnectionError("store unavailable")

    async def get_item(self, key: str) -> str | None:
        self._fail()

    async def set_item(self, key: str, value: str) -> None:
        self._fail()

    async def remove_item(self, key: str) -> None:
        self._fail()

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        self._fail()

    async def multi_remove(self, keys: Sequence[str]) -> None:
        self._fail()

    async def get_all_keys(self) -> list[str]:
        self._fail()

    async def clear(self) -> None:
        self._fail()

    async def health_check(self) -> bool:
        return False


class FakeNewsSource:
    """NewsSource that serves canned articles and records calls."""

    def __init__(self, articles: list[Article] | None = None, error: Exception | None = None) -> None:
        self.articles = articles if articles is not None else make_articles(3)
        self.error = error
        self.headline_calls: list[dict] = []
        self.search_calls: list[dict] = []

    async def top_headlines(self, country=None, category=None, q=None, page_size=None, page=None):
        self.headline_calls.append({"country": country, "category": category, "q": q})
        if self.error is not None:
            raise self.error
        return NewsApiResponse(status="ok", total_results=len(self.articles) * 10, articles=self.articles)

    async def everything(self, q=None, language=None, sort_by=None, page=None):
        self.search_calls.append({"q": q, "language": language, "sort_by": sort_by})
        if self.error is not None:
            raise self.error
        return NewsApiResponse(status="ok", total_results=len(self.articles), articles=self.articles)


def make_articles(count: int, topic: str = "tech") -> list[Article]:
    return [
        Article(
            source=ArticleSource(id=f"{topic}-wire", name=f"{topic.title()} Wire"),
            author="Jane Doe",
            title=f"{topic} headline {i}",
            description=f"About {topic} {i}",
            url=f"https://news.example.com/{topic}/{i}",
            url_to_image=f"https://img.example.com/{topic}/{i}.jpg",
            published_at="2024-05-01T12:00:00Z",
            content=f"Body of {topic} article {i}",
        )
        for i in range(count)
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(store: InMemoryKeyValueStore, clock: FakeClock) -> TTLCache:
    return TTLCache(store, clock=clock)


@pytest.fixture
def json_storage(store: InMemoryKeyValueStore) -> JsonStorage:
    return JsonStorage(store)


@pytest.fixture
def articles() -> list[Article]:
    return make_articles(3)


@pytest.fixture
def news_source(articles: list[Article]) -> FakeNewsSource:
    return FakeNewsSource(articles)


@pytest.fixture
def failing_news_source() -> FakeNewsSource:
    return FakeNewsSource(error=NewsApiError("News API error: 429 - rate limited", status_code=429))
