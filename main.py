"""
Best Buy 类目匹配命令行：读取查询文件（.txt / .xlsx），逐条匹配本地类目库，可选远端回退，结果写入 output 目录下的 Excel。

init_config 准备配置与日志，load_data 组装匹配器与回退缓存，
每个输入文件依次经过 run_matching 与 save_output。
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from app import (
    MATCH_SUCCESS_METHODS,
    MODES,
    apply_remote_fallback,
    normalize_input_path,
    read_queries_from_file,
    run_batch_match,
    to_result_rows,
    write_result_excel,
)
from app.batch_match import MODE_BEST, MODE_TOP
from bootstrap import build_bestbuy_client, build_finder, build_remote_cache
from core import CategoryFinder, RemoteCategoryCache
from core.config import get_app_config, get_log_dir, get_output_dir, load_app_config
from models.schemas import MatchResult, ResultRow, RunConfigSchema

logger = logging.getLogger(__name__)

RunConfig = RunConfigSchema

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_PREFIX = "category_matching"
QUIT_COMMANDS = frozenset({"q", "quit", "exit"})


def init_config(
    *,
    output_dir: Path | None = None,
    log_dir: Path | None = None,
) -> RunConfigSchema:
    """
    读取统一配置并挂上当日日志文件，返回本次运行的路径配置。

    Args:
        output_dir: 结果输出目录，缺省取 core.config.get_output_dir()。
        log_dir: 日志目录，缺省取 core.config.get_log_dir()。
    """
    load_app_config()
    run_config = RunConfigSchema(
        output_dir=output_dir or get_output_dir(),
        log_dir=log_dir or get_log_dir(),
        sheet_title=get_app_config().app.result_sheet_title,
    )
    _setup_logging(run_config.log_dir)
    logger.info("输出目录: %s，日志目录: %s", run_config.output_dir, run_config.log_dir)
    print(f"配置已加载: output_dir={run_config.output_dir}")
    return run_config


def _setup_logging(log_dir: Path, level: int = logging.INFO) -> None:
    """根 logger 追加 {LOG_FILE_PREFIX}_YYYYMMDD.log 文件输出；同一文件只挂一次。"""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (log_dir / f"{LOG_FILE_PREFIX}_{datetime.now():%Y%m%d}.log").resolve()
    root = logging.getLogger()
    root.setLevel(level)
    already = any(
        isinstance(h, logging.FileHandler) and h.baseFilename == str(log_file) for h in root.handlers
    )
    if already:
        return
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)


def load_data(*, remote: bool = False) -> tuple[CategoryFinder, RemoteCategoryCache | None]:
    """
    构造类目匹配器；remote 为真且回退已启用时同时构造远端回退缓存。

    Returns:
        (finder, remote_cache): remote_cache 为 None 表示不做远端回退。
    """
    finder = build_finder()
    cache = build_remote_cache() if remote else None
    print(f"类目库 {len(finder.taxonomy)} 条，分组 {len(finder.taxonomy.group_names)} 个。")
    return finder, cache


async def _remote_pass(results: list[MatchResult], cache: RemoteCategoryCache) -> list[MatchResult]:
    """打开 Best Buy 客户端，对未匹配结果做远端回退，结束后关闭客户端。"""
    client = build_bestbuy_client()
    if client is None:
        return results
    async with client:
        cache.client = client
        try:
            return await apply_remote_fallback(results, cache)
        finally:
            cache.client = None


def run_matching(
    queries: list[str],
    finder: CategoryFinder,
    *,
    mode: str = MODE_BEST,
    top: int | None = None,
    remote_cache: RemoteCategoryCache | None = None,
) -> list[ResultRow]:
    """
    对查询列表执行批量匹配，返回 6 列结果行。

    Args:
        queries: 待匹配查询列表。
        finder: 类目匹配器（由 load_data 返回）。
        mode: best / suggest / top。
        top: top 模式下每条查询的结果条数，默认取配置 matching.list_limit。
        remote_cache: 非 None 时对本地未匹配的查询做远端回退。

    Raises:
        RuntimeError: 批量匹配失败。
    """
    if not queries:
        return []
    matching_cfg = get_app_config().matching
    threshold = matching_cfg.list_threshold if mode == MODE_TOP else matching_cfg.find_threshold
    limit = top if top is not None else matching_cfg.list_limit
    try:
        results = run_batch_match(queries, finder, mode, threshold=threshold, limit=limit)
        if remote_cache is not None:
            results = asyncio.run(_remote_pass(results, remote_cache))
    except Exception as e:
        logger.exception("批量匹配失败: %s", e)
        raise RuntimeError("批量匹配失败") from e
    return to_result_rows(results)


def output_filename(source_stem: str | None, ignore_stem: str, now: datetime | None = None) -> str:
    """结果文件名：有意义的输入文件名作前缀，再接「匹配结果_时间戳.xlsx」。"""
    stamp = f"{now or datetime.now():%Y%m%d_%H%M%S}"
    prefix = f"{source_stem}_" if source_stem and source_stem != ignore_stem else ""
    return f"{prefix}匹配结果_{stamp}.xlsx"


def save_output(
    result_rows: list[ResultRow],
    output_dir: Path,
    *,
    source_stem: str | None = None,
    ignore_stem: str | None = None,
    sheet_title: str | None = None,
) -> Path:
    """
    结果行写入 output_dir 下的新 Excel 并返回其路径；ignore_stem 缺省取配置 app.input_stem_ignore。

    Raises:
        RuntimeError: Excel 写入失败。
    """
    app_cfg = get_app_config().app
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / output_filename(
        source_stem, app_cfg.input_stem_ignore if ignore_stem is None else ignore_stem
    )
    try:
        write_result_excel(result_rows, target, sheet_title or app_cfg.result_sheet_title)
    except Exception as e:
        logger.exception("写入结果失败: %s", target)
        raise RuntimeError(f"写入结果文件失败: {target}") from e
    logger.info("结果已写入: %s（%d 行）", target, len(result_rows))
    return target


def _process_one_file(
    input_path: Path,
    config: RunConfigSchema,
    finder: CategoryFinder,
    *,
    mode: str = MODE_BEST,
    top: int | None = None,
    remote_cache: RemoteCategoryCache | None = None,
) -> Path | None:
    """读取 -> 匹配 -> 写出单个查询文件；任一步失败时提示并返回 None。"""
    try:
        queries = read_queries_from_file(input_path)
    except Exception as e:
        print(f"无法读取查询文件 {input_path}: {e}")
        return None
    if not queries:
        print(f"没有可匹配的查询: {input_path}")
        return None

    try:
        rows = run_matching(queries, finder, mode=mode, top=top, remote_cache=remote_cache)
        failed = sum(1 for row in rows if row[5] not in MATCH_SUCCESS_METHODS)
        print(f"共 {len(queries)} 条查询，输出 {len(rows)} 行，其中未匹配 {failed} 行（已标红）。")
        out_path = save_output(rows, config.output_dir, source_stem=input_path.stem, sheet_title=config.sheet_title)
    except RuntimeError as e:
        print(e)
        return None
    print(f"结果文件: {out_path}")
    return out_path


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("必须为正整数")
    return n


def _parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """命令行参数；args 为 None 时读 sys.argv。"""
    parser = argparse.ArgumentParser(
        description="将查询文件中的每条搜索词匹配到 Best Buy 类目，结果输出为 Excel。",
    )
    parser.add_argument("input_file", nargs="?", help="查询文件（.txt 每行一条 / .xlsx 查询词列）；省略则交互输入")
    parser.add_argument("--no-loop", action="store_true", help="处理完 input_file 后直接退出")
    parser.add_argument("--mode", choices=MODES, default=MODE_BEST, help="best 最佳一条 / suggest 搜索词推荐 / top 前 N 条")
    parser.add_argument("--top", type=_positive_int, help="top 模式每条查询的输出条数，缺省取 matching.list_limit")
    parser.add_argument("--remote", action="store_true", help="本地未匹配时查询 Best Buy Categories API")
    return parser.parse_args(args)


def _iter_input_paths(first: str | None, *, once: bool) -> Iterator[Path]:
    """先给出命令行传入的路径，之后（once 为假时）反复提示输入，直到用户输入 q。"""
    if first:
        yield normalize_input_path(first)
        if once:
            return
    print("请拖入或输入查询文件路径（.txt / .xlsx），输入 q 退出。\n")
    while True:
        raw = input("文件路径: ").strip()
        if raw.lower() in QUIT_COMMANDS:
            print("退出。")
            return
        if raw:
            yield normalize_input_path(raw)


def main(args: list[str] | None = None) -> None:
    """
    python main.py                              交互输入文件路径
    python main.py queries.txt                  先处理该文件，再进入交互
    python main.py queries.txt --no-loop        只处理该文件
    python main.py queries.xlsx --mode top --top 3 --remote
    """
    parsed = _parse_args(args)
    config = init_config()
    try:
        finder, remote_cache = load_data(remote=parsed.remote)
    except Exception as e:
        logger.exception("初始化失败")
        print(f"初始化失败，退出: {e}")
        sys.exit(1)

    for path in _iter_input_paths(parsed.input_file, once=parsed.no_loop):
        if not path.is_file():
            print(f"文件不存在: {path}\n")
            continue
        _process_one_file(path, config, finder, mode=parsed.mode, top=parsed.top, remote_cache=remote_cache)
        print()


if __name__ == "__main__":
    main()
