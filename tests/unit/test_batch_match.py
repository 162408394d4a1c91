"""app.batch_match 单元测试：单条匹配各模式、批量运行、远端回退替换未匹配结果。"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.batch_match import (
    apply_remote_fallback,
    match_query,
    run_batch_match,
    to_result_rows,
)
from app.file_io import METHOD_EXACT, METHOD_EXCEPTION, METHOD_LOCAL, METHOD_REMOTE, METHOD_UNMATCHED
from core import CategoryFinder, RemoteCategoryCache
from domain.taxonomy import Taxonomy
from models.schemas import MatchResult


@pytest.fixture
def finder() -> CategoryFinder:
    return CategoryFinder(Taxonomy())


class TestMatchQuery:
    def test_best(self, finder: CategoryFinder) -> None:
        [r] = match_query("laptop", finder)
        assert r.category_id == "abcat0502000"
        assert r.parent_name == "Computers & Tablets"
        assert r.method == METHOD_LOCAL

    def test_exact(self, finder: CategoryFinder) -> None:
        [r] = match_query("Laptops", finder)
        assert r.method == METHOD_EXACT
        assert r.score == 1.0

    def test_unmatched(self, finder: CategoryFinder) -> None:
        [r] = match_query("nonexistentwidget123", finder)
        assert r.method == METHOD_UNMATCHED
        assert r.matched is False

    def test_suggest(self, finder: CategoryFinder) -> None:
        [r] = match_query("buy a new gaming mouse", finder, "suggest")
        assert r.category_name == "Video Games"

    def test_top(self, finder: CategoryFinder) -> None:
        results = match_query("tv", finder, "top", limit=3)
        assert len(results) == 3
        assert results[0].category_id == "abcat0101000"
        assert all(r.query == "tv" for r in results)

    def test_threshold(self, finder: CategoryFinder) -> None:
        [r] = match_query("laptop", finder, threshold=0.95)
        assert r.method == METHOD_UNMATCHED

    def test_unknown_mode(self, finder: CategoryFinder) -> None:
        with pytest.raises(ValueError):
            match_query("laptop", finder, "fuzzy")


class TestRunBatchMatch:
    def test_order_preserved(self, finder: CategoryFinder) -> None:
        results = run_batch_match(["laptop", "nonexistentwidget123", "tv"], finder)
        assert [r.query for r in results] == ["laptop", "nonexistentwidget123", "tv"]
        assert [r.method for r in results] == [METHOD_LOCAL, METHOD_UNMATCHED, METHOD_LOCAL]

    def test_single_failure_isolated(self) -> None:
        broken = MagicMock(spec=CategoryFinder)
        broken.find_category.side_effect = [RuntimeError("boom"), None]
        results = run_batch_match(["a", "b"], broken)
        assert [r.method for r in results] == [METHOD_EXCEPTION, METHOD_UNMATCHED]

    def test_rows(self, finder: CategoryFinder) -> None:
        rows = to_result_rows(run_batch_match(["laptop"], finder))
        assert rows == [("laptop", "abcat0502000", "Laptops", "Computers & Tablets", "0.9000", METHOD_LOCAL)]


class _Client:
    def __init__(self) -> None:
        self.calls = 0

    async def get_categories(self, page: int = 1, page_size: int = 100):
        self.calls += 1
        return SimpleNamespace(categories=[SimpleNamespace(id="pcmcat999", name="Robot Vacuums")])

    async def get_category_by_id(self, category_id: str):
        return None


class TestApplyRemoteFallback:
    @pytest.mark.asyncio
    async def test_only_unmatched_resolved(self) -> None:
        client = _Client()
        cache = RemoteCategoryCache(client)
        results = [
            MatchResult(query="laptop", category_id="abcat0502000", category_name="Laptops", score=0.9, method=METHOD_LOCAL),
            MatchResult(query="robot", method=METHOD_UNMATCHED),
            MatchResult(query="teleporter", method=METHOD_UNMATCHED),
        ]
        resolved = await apply_remote_fallback(results, cache)
        assert resolved[0] is results[0]
        assert resolved[1].method == METHOD_REMOTE
        assert resolved[1].category_id == "pcmcat999"
        assert resolved[1].to_result_row()[4] == ""
        assert resolved[2].method == METHOD_UNMATCHED
        assert client.calls == 2
