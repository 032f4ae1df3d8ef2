#!/usr/bin/env python3
"""
Demo script for the feedstack cache.

Runs the TTL cache against an in-memory store (or Redis with
``STORE_BACKEND=redis``) and walks through hits, expiry, size accounting
and eviction. No News API key is needed.
"""

import asyncio

from feedstack.api.dependencies import create_store
from feedstack.cache import TTLCache
from feedstack.models import Article, ArticleSource
from feedstack.services import ArticleCache


class ManualClock:
    """Clock the demo can move forward."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def sample_articles(count: int, topic: str) -> list[Article]:
    return [
        Article(
            source=ArticleSource(id=None, name="Demo Wire"),
            author="Demo Desk",
            title=f"{topic} story #{i}",
            description=f"Something happened in {topic.lower()}.",
            url=f"https://example.com/{topic.lower()}/{i}",
            url_to_image=None,
            published_at="2024-05-01T12:00:00Z",
            content="Lorem ipsum " * 20,
        )
        for i in range(count)
    ]


async def demo_article_cache(cache: TTLCache, clock: ManualClock) -> None:
    """Demonstrate headline caching and expiry."""
    print_section("Headline cache")

    articles = ArticleCache(cache)
    await articles.cache_top_headlines("us", "technology", None, sample_articles(5, "Technology"))
    print("\n📝 Cached 5 technology headlines")

    hit = await articles.get_top_headlines("us", "technology", "")
    print(f"  ✓ Lookup with empty query: {len(hit or [])} articles (same key as None)")

    clock.advance(cache.default_duration + 1)
    miss = await articles.get_top_headlines("us", "technology", None)
    print(f"  ✓ After one hour: {'miss' if miss is None else 'unexpected hit'}")
    print(f"  Entries left: {await cache.key_count()}")


async def demo_eviction(store, clock: ManualClock) -> None:
    """Demonstrate size-bounded eviction with a small budget."""
    print_section("Eviction (budget 50 KB, low-water 40 KB)")

    cache = TTLCache(store, max_size=50_000, clock=clock, metadata_key="@feedstack:demo_metadata")
    for name, size in [("A", 30_000), ("B", 15_000), ("C", 10_000), ("D", 10_000)]:
        await cache.set(f"@feedstack:cache:demo:{name}", "x" * size)
        clock.advance(1)
        print(f"  + {name}: total {await cache.get_size():,} bytes")

    evicted = await cache.cleanup()
    remaining = sorted(key.rsplit(":", 1)[-1] for key in await cache.get_metadata())
    print(f"\n  Evicted {evicted} entry, remaining {remaining}, total {await cache.get_size():,} bytes")
    await cache.clear_all()


async def main() -> None:
    """Run all demos."""
    print("\n🚀 Feedstack Cache Demo")
    print("=" * 70)

    store = create_store()
    clock = ManualClock()
    cache = TTLCache(store, clock=clock)

    try:
        await demo_article_cache(cache, clock)
        await demo_eviction(store, clock)
        await cache.clear_all()

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nIf STORE_BACKEND=redis, make sure Redis is running:")
        print("  docker compose up -d")


if __name__ == "__main__":
    asyncio.run(main())
