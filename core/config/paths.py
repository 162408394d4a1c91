"""
路径解析：基准目录、配置目录、输出/日志目录。

- 基准目录默认为项目根（core 的父目录）。
- 环境变量：CATEGORY_MATCHING_BASE_DIR / CONFIG_DIR / OUTPUT_DIR / LOG_DIR
"""

from __future__ import annotations

import os
from pathlib import Path


def _from_env(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value).resolve() if value else None


def get_base_dir() -> Path:
    """基准目录：环境变量优先，否则为项目根。"""
    env = _from_env("CATEGORY_MATCHING_BASE_DIR")
    if env is not None:
        return env
    return Path(__file__).resolve().parent.parent.parent


def get_config_dir() -> Path:
    """配置文件目录（app_config.yaml 所在）。"""
    return _from_env("CATEGORY_MATCHING_CONFIG_DIR") or get_base_dir() / "config"


def get_output_dir() -> Path:
    """匹配结果输出目录。"""
    return _from_env("CATEGORY_MATCHING_OUTPUT_DIR") or get_base_dir() / "output"


def get_log_dir() -> Path:
    """日志文件目录。"""
    return _from_env("CATEGORY_MATCHING_LOG_DIR") or get_base_dir() / "logs"
