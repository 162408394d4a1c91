"""
依赖注入：Annotated[T, Depends(getter)] 声明依赖，inject() 取出 getter 并调用。

    from core.config import inject, MatchingConfig

    matching = inject(MatchingConfig)
"""

from __future__ import annotations

from typing import Annotated, Callable, get_args, get_origin


class Depends:
    """依赖标记，仅保存解析函数。"""

    __slots__ = ("getter",)

    def __init__(self, getter: Callable[[], object]) -> None:
        self.getter = getter

    def __repr__(self) -> str:
        return f"Depends({getattr(self.getter, '__name__', self.getter)!r})"


def inject(typed: object) -> object:
    """解析 Annotated 别名中的第一个 Depends 并返回其结果；不满足约定时抛出 TypeError。"""
    if get_origin(typed) is not Annotated:
        raise TypeError(f"期望 Annotated 类型，得到: {typed}")
    for meta in get_args(typed)[1:]:
        if isinstance(meta, Depends):
            return meta.getter()
    raise TypeError(f"未找到 Depends 元数据: {typed}")
