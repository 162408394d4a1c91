"""文本相似度工具：规范化、Levenshtein 编辑距离与由其导出的相似度，便于单测与复用。"""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    规范化文本：转小写，删除非单词非空白字符，连续空白压缩为单个空格，去首尾空白。
    查询词、类目名、关键词在比较前都必须经过本函数；结果幂等。
    """
    if not text:
        return ""
    s = _NON_WORD_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub(" ", s).strip()


def levenshtein_distance(text_a: str, text_b: str) -> int:
    """
    经典编辑距离：插入、删除、替换单字符的最少次数。
    按 Unicode 码位逐字符比较（不按字形簇合并组合字符）。
    """
    return int(Levenshtein.distance(text_a, text_b))


def string_similarity(text_a: str, text_b: str) -> float:
    """
    基于编辑距离的相似度，返回值在 [0, 1]：(较长长度 - 距离) / 较长长度。
    任一为空返回 0.0；完全相同返回 1.0。
    """
    if not text_a or not text_b:
        return 0.0
    if text_a == text_b:
        return 1.0
    longest = max(len(text_a), len(text_b))
    return (longest - levenshtein_distance(text_a, text_b)) / longest
