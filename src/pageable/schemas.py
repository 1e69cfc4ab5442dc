"""
分页 Pydantic 模型

列表接口返回结构：
{
  "items": [...],
  "pagination": { "page", "page_size", "total", "total_pages", ... }
}
"""
from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from pageable.page import PageResult

T = TypeVar("T")


class PageSchema(BaseModel):
    """分页元数据"""
    page: int = Field(..., description="当前页码（遵循首页约定）")
    page_size: int = Field(..., description="每页条数", ge=1)
    total: int = Field(..., description="总行数", ge=0)
    total_pages: int = Field(..., description="总页数", ge=0)
    start_row: int = Field(0, description="起始行（从0开始）")
    end_row: int = Field(0, description="结束行；最后一页时为总行数")
    is_first_page: bool = False
    is_last_page: bool = False
    is_empty: bool = True

    @classmethod
    def from_page(cls, page: PageResult) -> "PageSchema":
        return cls(**page.as_dict())


class PaginatedResponse(BaseModel, Generic[T]):
    """通用分页响应"""
    items: List[T]
    pagination: PageSchema

    @classmethod
    def from_page(
        cls,
        page: PageResult,
        serialize: Optional[Callable[[Any], T]] = None,
    ) -> "PaginatedResponse[T]":
        items = [serialize(item) for item in page.items] if serialize else list(page.items)
        return cls(items=items, pagination=PageSchema.from_page(page))


__all__ = ["PageSchema", "PaginatedResponse"]
