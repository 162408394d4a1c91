"""应用层：批量匹配、查询文件读写、路径规范化。"""

from .batch_match import (
    MODES,
    apply_remote_fallback,
    match_query,
    run_batch_match,
    to_result_rows,
)
from .file_io import (
    MATCH_SUCCESS_METHODS,
    normalize_input_path,
    read_queries_from_file,
    write_result_excel,
)

__all__ = [
    "MATCH_SUCCESS_METHODS",
    "MODES",
    "apply_remote_fallback",
    "match_query",
    "normalize_input_path",
    "read_queries_from_file",
    "run_batch_match",
    "to_result_rows",
    "write_result_excel",
]
