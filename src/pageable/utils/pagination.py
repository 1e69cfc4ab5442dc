"""通用分页计算

纯函数，不做任何 I/O：
- `derive_window`：页码 + 每页条数 → (limit, offset)，用于取数；
- `derive_metadata`：页码 + 每页条数 + 总行数 → 页数、起止行、首/末/空页标记，用于展示。

两者分开，取数调用不关心边界如何展示，翻页时也无需复用过期的元数据。

注意 end_row 的不对称约定：非最后一页时 end_row = start_row + page_size - 1（从 0 开始的下标）；
最后一页时 end_row = total_row_count（从 1 开始的行数，不是下标）。调用方依赖该行为，不要"修正"。
"""
from __future__ import annotations

from dataclasses import dataclass


DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True)
class PageWindow:
    limit: int
    offset: int


@dataclass(frozen=True)
class PageMeta:
    page_count: int
    start_row: int
    end_row: int
    is_first_page: bool
    is_last_page: bool
    is_empty: bool

    def as_dict(self) -> dict:
        return {
            "page_count": self.page_count,
            "start_row": self.start_row,
            "end_row": self.end_row,
            "is_first_page": self.is_first_page,
            "is_last_page": self.is_last_page,
            "is_empty": self.is_empty,
        }


def normalize_page_size(page_size: int, default_page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """单次调用的 page_size < 1 时静默回退到默认值"""
    if page_size is None or page_size < 1:
        return default_page_size
    return int(page_size)


@dataclass(frozen=True)
class PageRequest:
    """一次分页请求；page_size < 1 时在 normalized() 中回退到默认值"""
    page: int
    page_size: int

    def normalized(self, default_page_size: int = DEFAULT_PAGE_SIZE) -> "PageRequest":
        return PageRequest(self.page, normalize_page_size(self.page_size, default_page_size))


def page_index(requested_page: int, first_page_is_zero: bool) -> int:
    """把用户页码换算成从 0 开始的内部页序号（可能为负，由调用方决定是否截断）"""
    return requested_page if first_page_is_zero else requested_page - 1


def compute_page_count(total_row_count: int, page_size: int) -> int:
    """向上取整：total / page_size，有余数则 +1；total 为 0 时为 0"""
    if total_row_count <= 0:
        return 0
    page_count = total_row_count // page_size
    if total_row_count % page_size != 0:
        page_count += 1
    return page_count


def derive_window(
    requested_page: int,
    page_size: int,
    first_page_is_zero: bool = False,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PageWindow:
    """计算 LIMIT / OFFSET。

    负数或首页之前的页码按第一页处理（offset 为 0），从不抛错。
    """
    page_size = normalize_page_size(page_size, default_page_size)
    index = max(0, page_index(requested_page, first_page_is_zero))
    return PageWindow(limit=page_size, offset=index * page_size)


def derive_metadata(
    requested_page: int,
    page_size: int,
    total_row_count: int,
    first_page_is_zero: bool = False,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PageMeta:
    """计算分页元数据。

    - 空页：total == 0，或请求页在最后一页之后，或在第一页之前；
    - 最后一页：请求页 == 最后一页页码（1 起算时为 page_count，0 起算时为 page_count - 1）；
    - start_row 使用与 offset 相同的内部页序号，避免两者差一。
    """
    page_size = normalize_page_size(page_size, default_page_size)
    total_row_count = max(0, int(total_row_count or 0))
    page_count = compute_page_count(total_row_count, page_size)

    index = page_index(requested_page, first_page_is_zero)
    first_page = 0 if first_page_is_zero else 1

    is_empty = total_row_count == 0 or index >= page_count or index < 0
    is_last_page = page_count > 0 and index == page_count - 1

    start_row, end_row = 0, 0
    if not is_empty:
        start_row = index * page_size
        if is_last_page:
            end_row = total_row_count
        else:
            end_row = start_row + page_size - 1

    return PageMeta(
        page_count=page_count,
        start_row=start_row,
        end_row=end_row,
        is_first_page=requested_page == first_page,
        is_last_page=is_last_page,
        is_empty=is_empty,
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PageRequest",
    "PageWindow",
    "PageMeta",
    "normalize_page_size",
    "page_index",
    "compute_page_count",
    "derive_window",
    "derive_metadata",
]
