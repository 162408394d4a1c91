"""core.fallback 单元测试：远端回退缓存的命中、写入、淘汰、过期与异常吞掉。"""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from core.fallback import CategoryLookupClient, RemoteCategoryCache


def _cat(cat_id: str, name: str) -> SimpleNamespace:
    return SimpleNamespace(id=cat_id, name=name)


class FakeClient:
    """记录调用次数的远端客户端替身。"""

    def __init__(self, categories: list[SimpleNamespace], *, fail: bool = False) -> None:
        self.categories = categories
        self.fail = fail
        self.list_calls = 0
        self.id_calls = 0

    async def get_categories(self, page: int = 1, page_size: int = 100):
        self.list_calls += 1
        if self.fail:
            raise RuntimeError("network down")
        return SimpleNamespace(categories=self.categories[:page_size])

    async def get_category_by_id(self, category_id: str):
        self.id_calls += 1
        if self.fail:
            raise RuntimeError("network down")
        return next((c for c in self.categories if c.id == category_id), None)


CATEGORIES = [
    _cat("1", "Laptops"),
    _cat("2", "Laptop Accessories"),
    _cat("3", "Desktops"),
    _cat("4", "Drones"),
]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSearchCategoriesApi:
    @pytest.mark.asyncio
    async def test_fetch_filter_and_cache(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client)
        result = await cache.search_categories_api("LAPTOP")
        assert [c.id for c in result] == ["1", "2"]
        assert client.list_calls == 1
        assert "Laptops" in cache
        assert "laptop accessories" in cache
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_cache_hit_skips_remote(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client)
        await cache.search_categories_api("laptop")
        hit = await cache.search_categories_api("Laptops!")
        assert [c.id for c in hit] == ["1"]
        assert client.list_calls == 1

    @pytest.mark.asyncio
    async def test_page_size_passed(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client, page_size=1)
        result = await cache.search_categories_api("drones")
        assert result == []

    @pytest.mark.asyncio
    async def test_errors_swallowed(self, caplog) -> None:
        cache = RemoteCategoryCache(FakeClient(CATEGORIES, fail=True))
        with caplog.at_level(logging.WARNING, logger="core.fallback"):
            assert await cache.search_categories_api("laptop") == []
        assert "network down" in caplog.text
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_no_client(self) -> None:
        cache = RemoteCategoryCache()
        assert cache.client is None
        assert await cache.search_categories_api("laptop") == []
        assert await cache.get_category_by_id_api("1") is None


class TestGetCategoryByIdApi:
    @pytest.mark.asyncio
    async def test_cached_value_first(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client)
        await cache.search_categories_api("laptop")
        found = await cache.get_category_by_id_api("2")
        assert found is not None and found.name == "Laptop Accessories"
        assert client.id_calls == 0

    @pytest.mark.asyncio
    async def test_remote_lookup_is_cached(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client)
        found = await cache.get_category_by_id_api("4")
        assert found is not None and found.name == "Drones"
        assert "drones" in cache
        await cache.get_category_by_id_api("4")
        assert client.id_calls == 1

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        cache = RemoteCategoryCache(FakeClient(CATEGORIES))
        assert await cache.get_category_by_id_api("missing") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_errors_swallowed(self) -> None:
        cache = RemoteCategoryCache(FakeClient(CATEGORIES, fail=True))
        assert await cache.get_category_by_id_api("1") is None


class TestEviction:
    @pytest.mark.asyncio
    async def test_max_entries_lru(self) -> None:
        client = FakeClient(CATEGORIES)
        cache = RemoteCategoryCache(client, max_entries=2)
        await cache.get_category_by_id_api("1")
        await cache.get_category_by_id_api("3")
        # 访问 Laptops 使其成为最近使用
        assert "laptops" in cache
        await cache.get_category_by_id_api("4")
        assert len(cache) == 2
        assert "laptops" in cache
        assert "desktops" not in cache
        assert "drones" in cache

    @pytest.mark.asyncio
    async def test_ttl(self) -> None:
        clock = FakeClock()
        cache = RemoteCategoryCache(FakeClient(CATEGORIES), ttl_seconds=10, clock=clock)
        await cache.get_category_by_id_api("1")
        clock.now = 9.5
        assert "laptops" in cache
        clock.now = 10.0
        assert "laptops" not in cache
        assert cache.cached_values() == []

    def test_invalid_bounds(self) -> None:
        with pytest.raises(ValueError):
            RemoteCategoryCache(max_entries=0)
        with pytest.raises(ValueError):
            RemoteCategoryCache(ttl_seconds=0)

    @pytest.mark.asyncio
    async def test_clear(self) -> None:
        cache = RemoteCategoryCache(FakeClient(CATEGORIES))
        await cache.search_categories_api("laptop")
        cache.clear()
        assert len(cache) == 0


def test_fake_client_satisfies_protocol() -> None:
    assert isinstance(FakeClient([]), CategoryLookupClient)
