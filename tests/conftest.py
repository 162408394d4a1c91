"""pytest 共享 fixture 与配置。"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# 保证项目根在 sys.path 中，便于导入 core / domain / app / infrastructure
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from core.config import set_app_config  # noqa: E402
from models.schemas import AppConfigSchema  # noqa: E402


@pytest.fixture
def default_app_config():
    """以默认值替换统一配置，结束后恢复为未加载状态。"""
    config = AppConfigSchema()
    set_app_config(config)
    yield config
    set_app_config(None)
