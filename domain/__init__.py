"""领域模型：类目条目、匹配结果、Best Buy 类目表。"""

from .category import CategoryEntry, CategoryMatch
from .taxonomy import Taxonomy, get_taxonomy

__all__ = ["CategoryEntry", "CategoryMatch", "Taxonomy", "get_taxonomy"]
