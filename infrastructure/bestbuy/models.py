"""Best Buy Categories API 响应模型（Pydantic V2），字段别名与接口 JSON 一致。"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CategoryPathItem(BaseModel):
    """类目路径中的一个祖先节点。"""

    id: str | None = Field(default=None, description="祖先类目 ID")
    name: str | None = Field(default=None, description="祖先类目名称")

    def __str__(self) -> str:
        return self.name or self.id or "Unknown"


class RemoteCategory(BaseModel):
    """远端类目记录；至少包含 id 与 name，与本地 CategoryEntry 兼容。"""

    id: str = Field(default="", description="类目 ID，如 abcat0101000")
    name: str = Field(default="", description="类目名称")
    active: bool | None = Field(default=None, description="是否在售")
    url: str | None = Field(default=None, description="bestbuy.com 上的类目地址")
    sub_categories: list[str] = Field(default_factory=list, alias="subCategories", description="子类目 ID 列表")
    path: list[CategoryPathItem] = Field(default_factory=list, description="从根到本类目的路径")

    @field_validator("id", "name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("sub_categories", mode="before")
    @classmethod
    def sub_category_ids(cls, v: Any) -> list[str]:
        # 接口返回 [{"id": ..., "name": ...}, ...]，只保留 ID
        if not isinstance(v, list):
            return []
        ids: list[str] = []
        for item in v:
            if isinstance(item, dict) and isinstance(item.get("id"), str):
                ids.append(item["id"])
            elif isinstance(item, str):
                ids.append(item)
        return ids

    @field_validator("path", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []

    @property
    def is_top_level(self) -> bool:
        return len(self.path) <= 1

    @property
    def parent_id(self) -> str | None:
        return self.path[-2].id if len(self.path) > 1 else None

    def __str__(self) -> str:
        return f"RemoteCategory(id: {self.id}, name: {self.name})"

    model_config = {"populate_by_name": True}


class CategorySearchResponse(BaseModel):
    """分页的类目列表响应。"""

    from_: int = Field(default=1, alias="from")
    to: int = Field(default=0)
    total: int = Field(default=0)
    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=0, alias="totalPages")
    categories: list[RemoteCategory] = Field(default_factory=list)

    @field_validator("categories", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    def __len__(self) -> int:
        return len(self.categories)

    model_config = {"populate_by_name": True}
