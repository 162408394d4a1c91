"""
匹配核心：文本规范化与编辑距离、类目打分、本地类目匹配、远端回退缓存。
"""

from domain.category import CategoryEntry, CategoryMatch
from domain.taxonomy import Taxonomy, get_taxonomy
from .fallback import CategoryLookupClient, RemoteCategoryCache
from .matching import CategoryFinder
from .scoring import score_category
from .utils.similarity import levenshtein_distance, normalize_text, string_similarity

__all__ = [
    "CategoryEntry",
    "CategoryMatch",
    "CategoryFinder",
    "CategoryLookupClient",
    "RemoteCategoryCache",
    "Taxonomy",
    "get_taxonomy",
    "levenshtein_distance",
    "normalize_text",
    "score_category",
    "string_similarity",
]
