"""
core.config：路径、统一 YAML 配置 app_config.yaml 及加载。

- 配置：config/app_config.yaml（matching、fallback、bestbuy、app 四节）。
- 统一加载：load_app_config() 启动时调用一次；各节通过 inject(Annotated 类型) 获取。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

from models.schemas import (
    AppConfigSchema,
    AppSection,
    BestBuySection,
    FallbackSection,
    MatchingSection,
)

from . import deps as _deps
from . import loader as _loader
from . import paths as _paths

Depends = _deps.Depends
inject = _deps.inject
logger = logging.getLogger(__name__)

get_app_config_path = _loader.get_app_config_path
get_base_dir = _paths.get_base_dir
get_config_dir = _paths.get_config_dir
get_output_dir = _paths.get_output_dir
get_log_dir = _paths.get_log_dir

_app_config: AppConfigSchema | None = None


def load_app_config(path: Path | None = None, *, reload: bool = False) -> AppConfigSchema:
    """加载并缓存统一配置；已加载且未要求 reload 时直接返回缓存。"""
    global _app_config
    if _app_config is not None and not reload:
        return _app_config
    _app_config = _loader.load_app_config_yaml(path)
    logger.debug("配置已加载: %s", path or get_app_config_path())
    return _app_config


def set_app_config(config: AppConfigSchema | None) -> None:
    """直接替换缓存的配置；传 None 时下次访问重新加载（测试用）。"""
    global _app_config
    _app_config = config


def get_app_config() -> AppConfigSchema:
    return load_app_config()


def _get_matching_config() -> MatchingSection:
    return get_app_config().matching


def _get_fallback_config() -> FallbackSection:
    return get_app_config().fallback


def _get_bestbuy_config() -> BestBuySection:
    return get_app_config().bestbuy


def _get_app_section() -> AppSection:
    return get_app_config().app


AppConfig = Annotated[AppConfigSchema, Depends(get_app_config)]
MatchingConfig = Annotated[MatchingSection, Depends(_get_matching_config)]
FallbackConfig = Annotated[FallbackSection, Depends(_get_fallback_config)]
BestBuyConfig = Annotated[BestBuySection, Depends(_get_bestbuy_config)]
AppSectionConfig = Annotated[AppSection, Depends(_get_app_section)]

__all__ = [
    "load_app_config",
    "set_app_config",
    "get_app_config",
    "get_app_config_path",
    "get_base_dir",
    "get_config_dir",
    "get_output_dir",
    "get_log_dir",
    "Depends",
    "inject",
    "AppConfig",
    "MatchingConfig",
    "FallbackConfig",
    "BestBuyConfig",
    "AppSectionConfig",
]
