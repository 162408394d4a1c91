"""批量类目匹配：单条查询匹配 + 批量运行，可选对未命中的查询走远端回退（async 并发）。"""

from __future__ import annotations

import asyncio
import logging

from tqdm import tqdm  # type: ignore[import-untyped]

from core import CategoryFinder, CategoryMatch, RemoteCategoryCache
from models.schemas import MatchResult, ResultRow

from .file_io import METHOD_EXACT, METHOD_EXCEPTION, METHOD_LOCAL, METHOD_REMOTE, METHOD_UNMATCHED

logger = logging.getLogger(__name__)

MODE_BEST = "best"
MODE_SUGGEST = "suggest"
MODE_TOP = "top"
MODES = (MODE_BEST, MODE_SUGGEST, MODE_TOP)

# 远端回退时同时进行的请求数
BATCH_MAX_WORKERS = 4


def _to_result(query: str, match: CategoryMatch) -> MatchResult:
    entry = match.category
    return MatchResult(
        query=query,
        category_id=entry.id,
        category_name=entry.name,
        parent_name=entry.parent_name,
        score=match.score,
        method=METHOD_EXACT if match.is_exact_match else METHOD_LOCAL,
    )


def match_query(
    query: str,
    finder: CategoryFinder,
    mode: str = MODE_BEST,
    *,
    threshold: float | None = None,
    limit: int = 10,
) -> list[MatchResult]:
    """
    单条查询的本地匹配，返回至少一条结果（未命中时为一条「未匹配」）。
    best：最佳一条；suggest：搜索词推荐；top：前 limit 条。
    """
    if mode == MODE_SUGGEST:
        match = finder.suggest_category_for_search(query)
        matches = [match] if match is not None else []
    elif mode == MODE_TOP:
        if threshold is None:
            matches = finder.find_categories(query, limit=limit)
        else:
            matches = finder.find_categories(query, limit=limit, threshold=threshold)
    elif mode == MODE_BEST:
        match = finder.find_category(query) if threshold is None else finder.find_category(query, threshold=threshold)
        matches = [match] if match is not None else []
    else:
        raise ValueError(f"未知匹配模式: {mode}")

    if not matches:
        return [MatchResult(query=query, method=METHOD_UNMATCHED)]
    return [_to_result(query, m) for m in matches]


async def match_query_remote(query: str, cache: RemoteCategoryCache) -> MatchResult:
    """远端回退：取远端按名称搜索到的第一条；失败或无结果时为「未匹配」。"""
    remote = await cache.search_categories_api(query)
    if not remote:
        return MatchResult(query=query, method=METHOD_UNMATCHED)
    first = remote[0]
    return MatchResult(
        query=query,
        category_id=getattr(first, "id", ""),
        category_name=getattr(first, "name", ""),
        method=METHOD_REMOTE,
    )


def run_batch_match(
    queries: list[str],
    finder: CategoryFinder,
    mode: str = MODE_BEST,
    *,
    threshold: float | None = None,
    limit: int = 10,
) -> list[MatchResult]:
    """批量本地匹配；单条异常时记为「程序异常」，不影响其余查询。"""
    if mode not in MODES:
        raise ValueError(f"未知匹配模式: {mode}")
    results: list[MatchResult] = []
    for query in tqdm(queries, desc="类目匹配", unit="条"):
        try:
            results.extend(match_query(query, finder, mode, threshold=threshold, limit=limit))
        except Exception as e:
            logger.exception("匹配异常 [%s]: %s", query[:40], e)
            results.append(MatchResult(query=query, method=METHOD_EXCEPTION))
    return results


async def apply_remote_fallback(
    results: list[MatchResult],
    cache: RemoteCategoryCache,
    max_workers: int = BATCH_MAX_WORKERS,
) -> list[MatchResult]:
    """对本地未匹配的结果并发查询远端，按原顺序返回替换后的结果列表。"""
    semaphore = asyncio.Semaphore(max_workers)

    async def _resolve(result: MatchResult) -> MatchResult:
        if result.method != METHOD_UNMATCHED:
            return result
        async with semaphore:
            return await match_query_remote(result.query, cache)

    resolved = await asyncio.gather(*(_resolve(r) for r in results))
    remote_hits = sum(1 for r in resolved if r.method == METHOD_REMOTE)
    logger.info("远端回退完成：命中 %d 条", remote_hits)
    return list(resolved)


def to_result_rows(results: list[MatchResult]) -> list[ResultRow]:
    return [r.to_result_row() for r in results]
