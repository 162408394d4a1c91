"""类目匹配相关数据模型（Pydantic V2）：类目条目与匹配结果。"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, computed_field, field_validator


def _strip_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def _strip_keywords(v: Any) -> tuple[str, ...]:
    if v is None:
        return ()
    if isinstance(v, (list, tuple)):
        return tuple(str(x).strip() for x in v if str(x).strip())
    return ()


class CategoryEntry(BaseModel):
    """静态类目条目：ID、展示名、父类目名（仅展示与打分用）、匹配关键词。"""

    id: str = Field(description="类目 ID，外部商品 API 使用的稳定键，不校验格式")
    name: str = Field(description="规范展示名")
    parent_name: str | None = Field(default=None, description="父类目名称，非结构引用")
    keywords: tuple[str, ...] = Field(default=(), description="同义词 / 别名，仅用于匹配")

    @field_validator("id", "name", mode="before")
    @classmethod
    def strip_str_fields(cls, v: Any) -> str:
        return _strip_str(v)

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v: Any) -> tuple[str, ...]:
        return _strip_keywords(v)

    @property
    def display_name(self) -> str:
        """含父类目的完整展示名。"""
        return f"{self.parent_name} > {self.name}" if self.parent_name else self.name

    def __str__(self) -> str:
        return f"CategoryEntry({self.id}: {self.display_name})"

    model_config = {"frozen": True}


class CategoryMatch(BaseModel):
    """一次查询的打分结果；category 与类目库共享同一实例。"""

    category: CategoryEntry = Field(description="命中的类目条目")
    score: float = Field(ge=0.0, le=1.0, description="匹配得分，最大为 1.0")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_exact_match(self) -> bool:
        return self.score >= 1.0

    def __str__(self) -> str:
        return f"CategoryMatch({self.category.name}, score: {self.score:.2f}, exact: {self.is_exact_match})"

    model_config = {"frozen": True}
