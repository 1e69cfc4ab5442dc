"""
分页结果

PageResult 只由 Paginator 构造，字段只读：修改任意字段都会破坏
page_count / start_row / end_row 之间的推导关系。唯一允许的变更是
`rebind()` 替换后续翻页使用的查询描述。
翻页方法总是返回新的 PageResult，不修改当前对象。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Iterator, MutableSequence, Optional, TypeVar

if TYPE_CHECKING:
    from pageable.services.page_query import Paginator

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    page_now: int
    page_count: int
    total_row_count: int
    page_size: int
    items: MutableSequence[T] = field(repr=False)
    is_first_page: bool
    is_last_page: bool
    is_empty: bool
    start_row: int
    # 最后一页时为总行数（从 1 起算），其余情况为下标（从 0 起算）
    end_row: int
    descriptor: Any = field(repr=False, compare=False)
    first_page_value: int = 1
    paginator: Optional["Paginator"] = field(default=None, repr=False, compare=False)

    # ---- 只读派生属性 ----
    @property
    def last_page_value(self) -> int:
        return self.page_count - 1 + self.first_page_value

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return max(0, self.page_now - self.first_page_value) * self.page_size

    @property
    def has_next(self) -> bool:
        return self.page_count > 0 and self.first_page_value <= self.page_now < self.last_page_value

    @property
    def has_previous(self) -> bool:
        return self.page_count > 0 and self.first_page_value < self.page_now <= self.last_page_value

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def as_dict(self) -> dict:
        return {
            "page": self.page_now,
            "page_size": self.page_size,
            "total": self.total_row_count,
            "total_pages": self.page_count,
            "start_row": self.start_row,
            "end_row": self.end_row,
            "is_first_page": self.is_first_page,
            "is_last_page": self.is_last_page,
            "is_empty": self.is_empty,
        }

    # ---- 翻页 ----
    def rebind(self, descriptor: Any) -> "PageResult[T]":
        """替换后续翻页使用的查询描述（例如过滤条件变化但分页状态保留）"""
        object.__setattr__(self, "descriptor", descriptor)
        return self

    def next_page(self, destination: Optional[MutableSequence[T]] = None) -> Optional["PageResult[T]"]:
        return self._goto(self.page_now + 1, destination)

    def previous_page(self, destination: Optional[MutableSequence[T]] = None) -> Optional["PageResult[T]"]:
        return self._goto(self.page_now - 1, destination)

    def first_page(self, destination: Optional[MutableSequence[T]] = None) -> Optional["PageResult[T]"]:
        return self._goto(self.first_page_value, destination)

    def last_page(self, destination: Optional[MutableSequence[T]] = None) -> Optional["PageResult[T]"]:
        return self._goto(self.last_page_value, destination)

    def _goto(self, page: int, destination: Optional[MutableSequence[T]]) -> Optional["PageResult[T]"]:
        if self.paginator is None:
            raise RuntimeError("PageResult was not produced by a Paginator; navigation is unavailable")
        # 默认分配新列表，避免覆盖当前结果的 items
        return self.paginator.fetch(page, self.page_size, self.descriptor, destination)


__all__ = ["PageResult"]
