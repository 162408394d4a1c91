"""
类目打分：查询词与单个类目条目的匹配得分。

各信号独立计算，最终得分取最大值（不求和），因此得分上限为 1.0：
- 类目名完全相等：1.0（直接返回）
- 类目名包含查询词：0.8；查询词包含类目名：0.7
- 查询词等于某关键词：0.9；关键词与查询词互相包含：0.6
- 词重叠：命中词数 / 查询词总数 * 0.5
- 编辑距离相似度 > 0.7 时：相似度 * 0.6
"""

from __future__ import annotations

from domain.category import CategoryEntry

from .utils.similarity import normalize_text, string_similarity

EXACT_NAME_SCORE = 1.0
KEYWORD_EXACT_SCORE = 0.9
NAME_CONTAINS_QUERY_SCORE = 0.8
QUERY_CONTAINS_NAME_SCORE = 0.7
KEYWORD_PARTIAL_SCORE = 0.6
WORD_OVERLAP_WEIGHT = 0.5
FUZZY_WEIGHT = 0.6
FUZZY_MIN_SIMILARITY = 0.7
# 词重叠时忽略的过短查询词（仍计入分母）
MIN_OVERLAP_WORD_LENGTH = 2


def _normalized_keywords(entry: CategoryEntry) -> list[str]:
    """规范化关键词，丢弃规范化后为空的项（空串会与任意文本互相包含）。"""
    return [k for k in (normalize_text(kw) for kw in entry.keywords) if k]


def _word_overlap_score(query: str, category_words: list[str]) -> float:
    query_words = query.split()
    if not query_words:
        return 0.0
    matched = 0
    for q_word in query_words:
        if len(q_word) < MIN_OVERLAP_WORD_LENGTH:
            continue
        if any(c_word in q_word or q_word in c_word for c_word in category_words):
            matched += 1
    return matched / len(query_words) * WORD_OVERLAP_WEIGHT


def score_category(normalized_query: str, entry: CategoryEntry) -> float:
    """
    计算已规范化查询词与类目条目的得分，返回值在 [0, 1]；无任何信号命中时为 0.0。
    normalized_query 必须已经过 normalize_text。
    """
    if not normalized_query:
        return 0.0
    name = normalize_text(entry.name)
    if normalized_query == name:
        return EXACT_NAME_SCORE

    keywords = _normalized_keywords(entry)
    score = 0.0

    if name and normalized_query in name:
        score = max(score, NAME_CONTAINS_QUERY_SCORE)
    if name and name in normalized_query:
        score = max(score, QUERY_CONTAINS_NAME_SCORE)

    if normalized_query in keywords:
        score = max(score, KEYWORD_EXACT_SCORE)
    if any(kw in normalized_query or normalized_query in kw for kw in keywords):
        score = max(score, KEYWORD_PARTIAL_SCORE)

    score = max(score, _word_overlap_score(normalized_query, name.split() + keywords))

    similarity = string_similarity(normalized_query, name)
    if similarity > FUZZY_MIN_SIMILARITY:
        score = max(score, similarity * FUZZY_WEIGHT)

    return score
