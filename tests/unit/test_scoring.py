"""core.scoring 单元测试：各打分信号取最大值。"""

from __future__ import annotations

import pytest

from core.scoring import score_category
from core.utils.similarity import normalize_text
from domain.category import CategoryEntry
from domain.taxonomy import ALL_CATEGORIES

ENTRY = CategoryEntry(id="x", name="Smart Lights", keywords=("smart bulb", "hue"))


class TestScoreCategory:
    def test_exact_name(self) -> None:
        assert score_category("smart lights", ENTRY) == 1.0

    def test_keyword_exact(self) -> None:
        assert score_category("hue", ENTRY) == pytest.approx(0.9)

    def test_name_contains_query(self) -> None:
        assert score_category("lights", ENTRY) == pytest.approx(0.8)

    def test_query_contains_name(self) -> None:
        assert score_category("smart lights kit", ENTRY) == pytest.approx(0.7)

    def test_keyword_partial(self) -> None:
        assert score_category("bulb", ENTRY) == pytest.approx(0.6)

    def test_word_overlap(self) -> None:
        # 1/2 命中
        assert score_category("zz lights", ENTRY) == pytest.approx(0.25)

    def test_short_words_count_in_denominator(self) -> None:
        assert score_category("a lights", ENTRY) == pytest.approx(0.25)

    def test_fuzzy(self) -> None:
        # 换位两处替换：相似度 10/12
        assert score_category("smart lihgts", ENTRY) == pytest.approx(10 / 12 * 0.6)

    def test_no_signal(self) -> None:
        assert score_category("xyz", ENTRY) == 0.0

    def test_empty_query(self) -> None:
        assert score_category("", ENTRY) == 0.0

    def test_empty_keywords_ignored(self) -> None:
        entry = CategoryEntry(id="y", name="Widgets", keywords=("!!!",))
        assert score_category("gadget", entry) == 0.0


class TestTaxonomyScores:
    def test_self_match_is_exact(self) -> None:
        for entry in ALL_CATEGORIES:
            assert score_category(normalize_text(entry.name), entry) == 1.0

    @pytest.mark.parametrize("query", ["laptop", "tv", "usb c cable", "gaming mouse", "a", "nonexistentwidget123"])
    def test_score_range(self, query: str) -> None:
        q = normalize_text(query)
        for entry in ALL_CATEGORIES:
            assert 0.0 <= score_category(q, entry) <= 1.0
