"""
Pydantic V2 Schema：统一配置各节、运行时路径配置、匹配结果行。

- AppConfigSchema: config/app_config.yaml 根结构（matching、fallback、bestbuy、app）。
- RunConfigSchema: CLI 运行时路径配置。
- MatchResult: 单条查询的匹配输出，可转为结果 Excel 行。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

# ----- 统一配置各节 -----


class MatchingSection(BaseModel):
    """本地类目匹配阈值。"""

    find_threshold: float = Field(default=0.3, ge=0.0, le=1.0, description="单个最佳匹配阈值")
    list_threshold: float = Field(default=0.2, ge=0.0, le=1.0, description="前 N 个匹配阈值")
    list_limit: int = Field(default=10, ge=1, description="前 N 个匹配条数上限")
    suggest_threshold: float = Field(default=0.4, ge=0.0, le=1.0, description="搜索词整句推荐阈值")
    suggest_word_threshold: float = Field(default=0.5, ge=0.0, le=1.0, description="搜索词逐词推荐阈值")
    suggest_min_word_length: int = Field(default=3, ge=1, description="逐词推荐时忽略的短词长度")


class FallbackSection(BaseModel):
    """远端类目回退缓存。"""

    enabled: bool = Field(default=True, description="是否启用远端回退")
    page_size: int = Field(default=20, ge=1, description="远端搜索拉取的类目条数")
    max_entries: int | None = Field(default=None, ge=1, description="缓存条数上限，空为不限")
    ttl_seconds: float | None = Field(default=None, gt=0, description="缓存有效期（秒），空为永不过期")


class BestBuySection(BaseModel):
    """Best Buy API 连接配置。"""

    base_url: str = Field(default="https://api.bestbuy.com/v1", description="API base URL")
    api_key: str = Field(default="", description="明文 API Key，优先于环境变量")
    api_key_env: str = Field(default="BESTBUY_API_KEY", description="读取 API Key 的环境变量名")
    timeout_seconds: float = Field(default=30.0, gt=0, description="单次请求超时")

    @field_validator("base_url", "api_key", "api_key_env", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("base_url", mode="after")
    @classmethod
    def rstrip_slash(cls, v: str) -> str:
        return v.rstrip("/") if v else v

    def resolve_api_key(self) -> str:
        """配置中的 Key，否则读取环境变量；都没有时返回空串。"""
        if self.api_key:
            return self.api_key
        return os.environ.get(self.api_key_env, "").strip() if self.api_key_env else ""


class AppSection(BaseModel):
    """CLI 相关。"""

    input_stem_ignore: str = Field(default="queries", description="输入文件名等于此值时不拼入输出文件名")
    result_sheet_title: str = Field(default="匹配结果", description="结果 Excel 工作表名")


class AppConfigSchema(BaseModel):
    """app_config.yaml 根结构；各节缺省时使用默认值。"""

    matching: MatchingSection = Field(default_factory=MatchingSection)
    fallback: FallbackSection = Field(default_factory=FallbackSection)
    bestbuy: BestBuySection = Field(default_factory=BestBuySection)
    app: AppSection = Field(default_factory=AppSection)

    @field_validator("matching", "fallback", "bestbuy", "app", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


# ----- 运行时路径 -----


class RunConfigSchema(BaseModel):
    """运行时路径配置：输出目录、日志目录。"""

    output_dir: Path = Field(description="匹配结果输出目录")
    log_dir: Path = Field(description="日志文件目录")
    sheet_title: str = Field(default="匹配结果", description="结果工作表名")


# ----- 匹配结果 -----

# 6 列：(输入查询, 类目 ID, 类目名称, 父类目, 得分, 匹配方式)
ResultRow = tuple[str, str, str, str, str, str]


class MatchResult(BaseModel):
    """单条查询的匹配输出。"""

    query: str = Field(default="", description="原始查询")
    category_id: str = Field(default="", description="命中的类目 ID")
    category_name: str = Field(default="", description="命中的类目名称")
    parent_name: str = Field(default="", description="父类目名称")
    score: float = Field(default=0.0, ge=0.0, le=1.0, description="匹配得分；远端回退结果为 0")
    method: str = Field(default="", description="匹配方式：精确/本地/远端/未匹配")

    @field_validator("query", "category_id", "category_name", "parent_name", "method", mode="before")
    @classmethod
    def strip_str(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @property
    def matched(self) -> bool:
        return bool(self.category_id)

    def to_result_row(self) -> ResultRow:
        """转为 6 列结果行；未匹配时得分列为空。"""
        score_str = f"{self.score:.4f}" if self.matched and self.score > 0 else ""
        return (
            self.query,
            self.category_id,
            self.category_name,
            self.parent_name,
            score_str,
            self.method,
        )
