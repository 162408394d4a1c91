"""类目匹配：遍历类目库逐条打分、排序、按阈值取单个最佳或前 N 个，以及按搜索词推荐类目。"""

from __future__ import annotations

import logging
from typing import Callable

from domain.category import CategoryEntry, CategoryMatch
from domain.taxonomy import Taxonomy, get_taxonomy

from .scoring import score_category
from .utils.similarity import normalize_text, string_similarity

logger = logging.getLogger(__name__)

DEFAULT_FIND_THRESHOLD = 0.3
DEFAULT_LIST_THRESHOLD = 0.2
DEFAULT_LIST_LIMIT = 10
SUGGEST_THRESHOLD = 0.4
SUGGEST_WORD_THRESHOLD = 0.5
SUGGEST_MIN_WORD_LENGTH = 3


class CategoryFinder:
    """
    在内存类目库上做模糊匹配，全部为纯函数式读取，无 I/O，可并发调用。
    类目库通过构造参数注入，默认使用进程级类目库。
    """

    def __init__(
        self,
        taxonomy: Taxonomy | None = None,
        *,
        suggest_threshold: float = SUGGEST_THRESHOLD,
        suggest_word_threshold: float = SUGGEST_WORD_THRESHOLD,
        suggest_min_word_length: int = SUGGEST_MIN_WORD_LENGTH,
    ) -> None:
        self._taxonomy = taxonomy if taxonomy is not None else get_taxonomy()
        self._suggest_threshold = suggest_threshold
        self._suggest_word_threshold = suggest_word_threshold
        self._suggest_min_word_length = suggest_min_word_length

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    def _rank(self, normalized_query: str, keep: Callable[[float], bool]) -> list[CategoryMatch]:
        """
        对全部条目打分，保留 keep(score) 为真的结果并按得分降序排序。
        同分时按查询词与类目名的编辑相似度降序，再按声明顺序（稳定排序）。
        """
        scored: list[tuple[float, float, CategoryEntry]] = []
        for entry in self._taxonomy.entries:
            score = score_category(normalized_query, entry)
            if keep(score):
                tie_break = string_similarity(normalized_query, normalize_text(entry.name))
                scored.append((score, tie_break, entry))
        scored.sort(key=lambda item: (item[0], item[1]), reverse=True)
        return [CategoryMatch(category=entry, score=score) for score, _, entry in scored]

    def find_category(
        self,
        query: str,
        threshold: float = DEFAULT_FIND_THRESHOLD,
    ) -> CategoryMatch | None:
        """返回得分最高的类目；无正分条目或最高分 < threshold 时返回 None。"""
        normalized_query = normalize_text(query)
        if not normalized_query:
            return None
        matches = self._rank(normalized_query, lambda score: score > 0)
        if not matches:
            return None
        best = matches[0]
        if best.score < threshold:
            logger.debug("类目匹配未达阈值 [%s]: %s %.2f < %.2f", query[:40], best.category.name, best.score, threshold)
            return None
        return best

    def find_categories(
        self,
        query: str,
        limit: int = DEFAULT_LIST_LIMIT,
        threshold: float = DEFAULT_LIST_THRESHOLD,
    ) -> list[CategoryMatch]:
        """返回得分 >= threshold 的类目，按得分降序，最多 limit 条。"""
        normalized_query = normalize_text(query)
        if not normalized_query or limit <= 0:
            return []
        return self._rank(normalized_query, lambda score: score >= threshold)[:limit]

    def get_category_by_id(self, category_id: str) -> CategoryEntry | None:
        """按 ID 精确查找（线性扫描，取首个）。"""
        return self._taxonomy.get_by_id(category_id)

    def suggest_category_for_search(self, search_query: str) -> CategoryMatch | None:
        """
        根据商品搜索词推荐类目：先整句匹配；未命中则按原始顺序逐词匹配，
        跳过过短的词，返回第一个达标的词的结果（不比较各词得分高低）。
        """
        match = self.find_category(search_query, threshold=self._suggest_threshold)
        if match is not None:
            return match

        for word in search_query.lower().split():
            if len(word) < self._suggest_min_word_length:
                continue
            word_match = self.find_category(word, threshold=self._suggest_word_threshold)
            if word_match is not None:
                logger.debug("按单词推荐类目 [%s] -> %s", word, word_match.category.name)
                return word_match
        return None
