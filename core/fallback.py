"""
远端类目回退缓存：本地类目库匹配不足时，查询远端类目接口并按规范化名称缓存结果。

回退查询是尽力而为的：远端任何异常都会被记录并转为空结果（[] / None），
调用方无法区分「查询失败」与「未找到」；需要区分时应直接包装远端客户端。
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from .utils.similarity import normalize_text

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@runtime_checkable
class CategoryLookupClient(Protocol):
    """远端类目查询协作方：返回对象至少带 id 与 name 字段。"""

    async def get_categories(self, page: int = 1, page_size: int = 100) -> Any:
        """返回带 .categories 列表的分页响应。"""
        ...

    async def get_category_by_id(self, category_id: str) -> Any | None:
        ...


def _categories_of(response: Any) -> Sequence[Any]:
    """兼容 .categories 属性或 {"categories": [...]} 字典两种响应形式。"""
    if isinstance(response, dict):
        return response.get("categories") or []
    return getattr(response, "categories", None) or []


class RemoteCategoryCache:
    """
    进程内缓存：规范化类目名 -> 远端类目记录。
    max_entries 为 None 时不限条数（超出时按最近最少使用淘汰）；ttl_seconds 为 None 时永不过期。
    写入通过 asyncio.Lock 串行化。
    """

    def __init__(
        self,
        client: CategoryLookupClient | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_entries: int | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries 必须为正整数或 None")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds 必须为正数或 None")
        self._client = client
        self.page_size = page_size
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # key -> (写入时间, 类目)
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = asyncio.Lock()

    @property
    def client(self) -> CategoryLookupClient | None:
        return self._client

    @client.setter
    def client(self, client: CategoryLookupClient | None) -> None:
        """替换远端客户端（如每次批处理各自打开/关闭连接），已缓存内容保留。"""
        self._client = client

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._get(normalize_text(name)) is not None

    def clear(self) -> None:
        self._entries.clear()

    # ----- 缓存读写 -----

    def _is_expired(self, stored_at: float) -> bool:
        return self.ttl_seconds is not None and self._clock() - stored_at >= self.ttl_seconds

    def _purge_expired(self) -> None:
        if self.ttl_seconds is None:
            return
        for key in [k for k, (stored_at, _) in self._entries.items() if self._is_expired(stored_at)]:
            del self._entries[key]

    def _get(self, key: str) -> Any | None:
        item = self._entries.get(key)
        if item is None:
            return None
        stored_at, category = item
        if self._is_expired(stored_at):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return category

    def _put(self, category: Any) -> None:
        key = normalize_text(str(getattr(category, "name", "") or ""))
        self._entries[key] = (self._clock(), category)
        self._entries.move_to_end(key)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("回退缓存已满，淘汰: %s", evicted)

    def cached_values(self) -> list[Any]:
        """当前未过期的缓存类目（按最近使用顺序，旧 -> 新）。"""
        self._purge_expired()
        return [category for _, category in self._entries.values()]

    # ----- 回退查询 -----

    async def search_categories_api(self, query: str) -> list[Any]:
        """
        按名称子串（不区分大小写）搜索远端类目。
        缓存命中时返回单元素列表；否则拉取一页远端类目，匹配项逐个写入缓存后全部返回。
        """
        if self._client is None:
            return []
        cached = self._get(normalize_text(query))
        if cached is not None:
            return [cached]

        try:
            response = await self._client.get_categories(page_size=self.page_size)
            needle = query.lower()
            matches = [c for c in _categories_of(response) if needle in str(getattr(c, "name", "") or "").lower()]
            async with self._lock:
                for category in matches:
                    self._put(category)
        except Exception as e:
            logger.warning("远端类目搜索失败 [%s]: %s", query[:40], e)
            return []
        logger.info("远端类目搜索 [%s]: %d 条", query[:40], len(matches))
        return matches

    async def get_category_by_id_api(self, category_id: str) -> Any | None:
        """先在缓存值中按 ID 查找，未命中再做远端单条查询并写入缓存。"""
        if self._client is None:
            return None
        for category in self.cached_values():
            if getattr(category, "id", None) == category_id:
                return category

        try:
            category = await self._client.get_category_by_id(category_id)
            if category is not None:
                async with self._lock:
                    self._put(category)
        except Exception as e:
            logger.warning("远端类目查询失败 [%s]: %s", category_id, e)
            return None
        return category
