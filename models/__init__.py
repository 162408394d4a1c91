"""Pydantic 模型与 Schema：配置、匹配结果。"""

from .schemas import (
    AppConfigSchema,
    AppSection,
    BestBuySection,
    FallbackSection,
    MatchingSection,
    MatchResult,
    ResultRow,
    RunConfigSchema,
)

__all__ = [
    "AppConfigSchema",
    "AppSection",
    "BestBuySection",
    "FallbackSection",
    "MatchingSection",
    "MatchResult",
    "ResultRow",
    "RunConfigSchema",
]
