"""文件读写：查询词读取（.txt 每行一条 / .xlsx 指定列）、匹配结果写入 Excel、用户输入路径规范化。"""

from __future__ import annotations

import os
import re
from pathlib import Path

from core.utils.excel_io import cell_value, open_excel_read, write_sheet
from models.schemas import ResultRow

# 匹配成功的方式；其余（未匹配、程序异常）行标红
METHOD_EXACT = "精确"
METHOD_LOCAL = "本地"
METHOD_REMOTE = "远端"
METHOD_UNMATCHED = "未匹配"
METHOD_EXCEPTION = "程序异常"
MATCH_SUCCESS_METHODS = (METHOD_EXACT, METHOD_LOCAL, METHOD_REMOTE)

# 输入 Excel 中查询词所在列的候选表头
INPUT_QUERY_COLS = ("查询词", "query", "Query")

HEADERS = ("输入查询", "类目 ID", "类目名称", "父类目", "得分", "匹配方式")

_WINDOWS_DRIVE_RE = re.compile(r"^([a-zA-Z])\s*[:\\](.*)$")


def normalize_input_path(raw: str) -> Path:
    """
    去掉首尾引号与空白（拖入终端的路径常带引号）；WSL 下把 Windows 盘符路径映射到 /mnt。
    例：'c:/Users/me/queries.txt' -> /mnt/c/Users/me/queries.txt
    """
    s = raw.strip().strip("\"'")
    if not s:
        return Path("")
    if os.name == "posix":
        m = _WINDOWS_DRIVE_RE.match(s)
        if m:
            rest = m.group(2).replace("\\", "/").strip("/")
            s = f"/mnt/{m.group(1).lower()}/{rest}" if rest else f"/mnt/{m.group(1).lower()}"
    return Path(s)


def _read_text_queries(path: Path) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"无法读取文件 {path}: {e}") from e
    return [line.strip() for line in text.splitlines() if line.strip()]


def _read_excel_queries(path: Path) -> list[str]:
    with open_excel_read(path) as (_wb, ws):
        if ws is None:
            return []
        rows = ws.iter_rows(min_row=1, values_only=True)
        header_row = next(rows, None)
        if not header_row:
            return []
        header = [cell_value(v) for v in header_row]
        col = next((i for i, h in enumerate(header) if h in INPUT_QUERY_COLS), None)
        if col is None:
            raise RuntimeError(f"输入 Excel 缺少查询列（{' / '.join(INPUT_QUERY_COLS)}）")
        queries: list[str] = []
        for row in rows:
            value = cell_value(row[col]) if row and col < len(row) else ""
            if value:
                queries.append(value)
        return queries


def read_queries_from_file(file_path: Path) -> list[str]:
    """读取查询词列表，去空行与首尾空白；支持 .txt 与 .xlsx。"""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"文件不存在: {path}")
    if path.suffix.lower() == ".xlsx":
        return _read_excel_queries(path)
    return _read_text_queries(path)


def write_result_excel(rows: list[ResultRow], output_path: Path, sheet_title: str = "匹配结果") -> None:
    """写入 6 列结果，匹配失败的行标红。"""
    write_sheet(
        Path(output_path),
        sheet_title,
        HEADERS,
        list(rows),
        failed_row_predicate=lambda row: len(row) > 5 and row[5] not in MATCH_SUCCESS_METHODS,
    )
