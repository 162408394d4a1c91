"""
依赖组装：为 CLI 与批处理提供统一入口，仅做依赖汇集（类目匹配器、远端回退缓存、Best Buy 客户端），不包含匹配算法。
"""

from __future__ import annotations

import logging

from core import CategoryFinder, RemoteCategoryCache, Taxonomy
from core.config import BestBuyConfig, FallbackConfig, MatchingConfig, inject
from infrastructure.bestbuy import BestBuyClient
from models.schemas import BestBuySection, FallbackSection, MatchingSection

logger = logging.getLogger(__name__)


def build_finder(
    matching_cfg: MatchingSection | None = None,
    taxonomy: Taxonomy | None = None,
) -> CategoryFinder:
    """按配置的搜索词推荐阈值构造类目匹配器；未传配置时从统一配置注入。"""
    cfg = matching_cfg if matching_cfg is not None else inject(MatchingConfig)
    return CategoryFinder(
        taxonomy,
        suggest_threshold=cfg.suggest_threshold,
        suggest_word_threshold=cfg.suggest_word_threshold,
        suggest_min_word_length=cfg.suggest_min_word_length,
    )


def build_remote_cache(fallback_cfg: FallbackSection | None = None) -> RemoteCategoryCache | None:
    """构造远端回退缓存（不带客户端）；回退未启用时返回 None。"""
    cfg = fallback_cfg if fallback_cfg is not None else inject(FallbackConfig)
    if not cfg.enabled:
        return None
    return RemoteCategoryCache(
        page_size=cfg.page_size,
        max_entries=cfg.max_entries,
        ttl_seconds=cfg.ttl_seconds,
    )


def build_bestbuy_client(bestbuy_cfg: BestBuySection | None = None) -> BestBuyClient | None:
    """按配置创建 Best Buy 客户端；未配置 API Key 时返回 None。"""
    cfg = bestbuy_cfg if bestbuy_cfg is not None else inject(BestBuyConfig)
    api_key = cfg.resolve_api_key()
    if not api_key:
        logger.warning("未配置 Best Buy API Key（bestbuy.api_key 或环境变量 %s），跳过远端回退", cfg.api_key_env)
        return None
    return BestBuyClient(api_key, base_url=cfg.base_url, timeout=cfg.timeout_seconds)


__all__ = [
    "build_bestbuy_client",
    "build_finder",
    "build_remote_cache",
]
