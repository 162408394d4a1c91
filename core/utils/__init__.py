"""公共工具：文本规范化、编辑距离与相似度、Excel 读写。"""

from .excel_io import cell_value, open_excel_read, write_sheet
from .similarity import (
    levenshtein_distance,
    normalize_text,
    string_similarity,
)

__all__ = [
    "cell_value",
    "open_excel_read",
    "write_sheet",
    "levenshtein_distance",
    "normalize_text",
    "string_similarity",
]
