"""Excel 读写公共逻辑：只读打开、单元格取值、写表头与数据行（可选标红、冻结表头）。"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

import openpyxl  # type: ignore[import-untyped]
from openpyxl.styles import Font  # type: ignore[import-untyped]
from openpyxl.utils import get_column_letter  # type: ignore[import-untyped]

MAX_COLUMN_WIDTH = 60


def cell_value(cell_or_value: Any) -> str:
    """openpyxl Cell 或 values_only 的裸值，统一为去空白的 str。"""
    v = getattr(cell_or_value, "value", cell_or_value)
    return "" if v is None else str(v).strip()


@contextmanager
def open_excel_read(path: Path) -> Iterator[tuple[Any, Any]]:
    """只读、data_only 打开 Excel，yield (wb, 活动表)，退出时关闭。"""
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        yield wb, wb.active
    finally:
        wb.close()


def write_sheet(
    output_path: Path,
    sheet_title: str,
    headers: tuple[str, ...],
    rows: list[tuple[Any, ...]],
    *,
    failed_row_predicate: Callable[[tuple[Any, ...]], bool] | None = None,
    red_font_hex: str = "FF0000",
) -> None:
    """写表头与数据行并保存；failed_row_predicate(row) 为真的行整行标红。父目录自动创建。"""
    wb = openpyxl.Workbook()
    ws = wb.active
    if ws is None:
        raise RuntimeError("无法创建工作表")
    ws.title = sheet_title
    bold = Font(bold=True)
    red_font = Font(color=red_font_hex)
    widths = [len(h) for h in headers]

    for col, h in enumerate(headers, start=1):
        ws.cell(row=1, column=col, value=h).font = bold
    for row_idx, row_data in enumerate(rows, start=2):
        failed = failed_row_predicate is not None and failed_row_predicate(row_data)
        for col_idx, value in enumerate(row_data, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if failed:
                cell.font = red_font
            if col_idx <= len(widths):
                widths[col_idx - 1] = max(widths[col_idx - 1], len(str(value or "")))

    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = min(width + 2, MAX_COLUMN_WIDTH)
    ws.freeze_panes = "A2"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
