"""Tests for JSON storage and the local-storage helpers."""

import pytest

from feedstack.models import AppSettings, Bookmark, Preferences
from feedstack.services import BookmarksStorage, OnboardingStorage, PreferencesStorage, SettingsStorage
from feedstack.storage import JsonStorage, StorageKeys

from .conftest import FailingStore, make_articles


@pytest.mark.asyncio
async def test_json_round_trip(json_storage, store):
    await json_storage.set_item("@feedstack:thing", {"a": [1, 2], "b": None})

    assert await json_storage.get_item("@feedstack:thing") == {"a": [1, 2], "b": None}
    assert await store.get_item("@feedstack:thing") == '{"a":[1,2],"b":null}'


@pytest.mark.asyncio
async def test_missing_and_undecodable_read_as_none(json_storage, store):
    await store.set_item("@feedstack:broken", "{not json")

    assert await json_storage.get_item("@feedstack:missing") is None
    assert await json_storage.get_item("@feedstack:broken") is None


@pytest.mark.asyncio
async def test_multi_get_decodes_each_value(json_storage, store):
    await json_storage.set_item("a", 1)
    await store.set_item("b", "{oops")

    assert await json_storage.multi_get(["a", "b", "c"]) == [("a", 1), ("b", None), ("c", None)]


@pytest.mark.asyncio
async def test_multi_remove_and_keys(json_storage):
    for key in ("a", "b", "c"):
        await json_storage.set_item(key, key)
    await json_storage.multi_remove(["a", "b"])

    assert await json_storage.get_all_keys() == ["c"]


@pytest.mark.asyncio
async def test_failing_store_reads_degrade_and_writes_raise():
    storage = JsonStorage(FailingStore())

    assert await storage.get_item("a") is None
    assert await storage.get_all_keys() == []
    assert await storage.multi_get(["a"]) == [("a", None)]
    with pytest.raises(ConnectionError):
        await storage.set_item("a", 1)
    with pytest.raises(ConnectionError):
        await storage.remove_item("a")


@pytest.mark.asyncio
async def test_preferences(json_storage):
    prefs = PreferencesStorage(json_storage)
    assert await prefs.get_preferences() is None

    await prefs.save_preferences(Preferences(country="gb", sort_by="popularity"))

    saved = await prefs.get_preferences()
    assert saved.country == "gb"
    assert saved.sort_by == "popularity"
    assert saved.category is None
    assert await json_storage.get_item(StorageKeys.PREFERENCES) == {"country": "gb", "sortBy": "popularity"}


@pytest.mark.asyncio
async def test_default_request_parameters(json_storage):
    prefs = PreferencesStorage(json_storage)
    assert await prefs.get_default_country() is None

    await prefs.set_default_country("de")
    await prefs.set_default_category("science")
    await prefs.set_default_language("de")
    await prefs.set_default_sort_by("relevancy")

    assert await prefs.get_default_country() == "de"
    assert await prefs.get_default_category() == "science"
    assert await prefs.get_default_language() == "de"
    assert await prefs.get_default_sort_by() == "relevancy"


@pytest.mark.asyncio
async def test_bookmarks_are_unique_by_url(json_storage):
    bookmarks = BookmarksStorage(json_storage)
    article = make_articles(1)[0]

    assert await bookmarks.add(Bookmark.from_article(article)) is True
    assert await bookmarks.add(Bookmark.from_article(article)) is False

    saved = await bookmarks.get_all()
    assert len(saved) == 1
    assert saved[0].url == article.url
    assert saved[0].bookmarked_at.endswith("Z")
    assert await bookmarks.is_bookmarked(article.url) is True


@pytest.mark.asyncio
async def test_bookmarks_keep_insertion_order_and_remove(json_storage):
    bookmarks = BookmarksStorage(json_storage)
    first, second, third = make_articles(3)
    for article in (first, second, third):
        await bookmarks.add(Bookmark.from_article(article))

    assert await bookmarks.remove(second.url) is True
    assert await bookmarks.remove(second.url) is False
    assert [b.url for b in await bookmarks.get_all()] == [first.url, third.url]

    await bookmarks.clear()
    assert await bookmarks.get_all() == []


@pytest.mark.asyncio
async def test_settings_defaults(json_storage):
    settings = SettingsStorage(json_storage)

    assert await settings.get_dark_mode() is None
    assert await settings.get_notifications_enabled() is True
    assert await settings.get_notification_categories() == []


@pytest.mark.asyncio
async def test_settings_save_all(json_storage):
    settings = SettingsStorage(json_storage)
    await settings.save_all(
        AppSettings(dark_mode=True, notifications_enabled=False, notification_categories=["sports"])
    )

    assert await settings.get_all() == AppSettings(
        dark_mode=True, notifications_enabled=False, notification_categories=["sports"]
    )

    await settings.save_all(AppSettings(dark_mode=None))
    assert await settings.get_dark_mode() is None
    assert await json_storage.get_item(StorageKeys.DARK_MODE) is None


@pytest.mark.asyncio
async def test_onboarding(json_storage):
    onboarding = OnboardingStorage(json_storage)
    assert await onboarding.is_completed() is False

    await onboarding.set_completed(True)
    assert await onboarding.is_completed() is True
