"""
测试辅助工具
"""
from typing import Any, Callable, Iterable, List, Optional

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import Session, declarative_base


Base = declarative_base()


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String(64), nullable=False)
    active = Column(Boolean, nullable=False, default=True)


def seed_items(session: Session, count: int, inactive: Iterable[int] = ()) -> List[Item]:
    """插入 count 条记录，id 从 1 开始；inactive 中的 id 标记为停用"""
    skip = set(inactive)
    items = [
        Item(id=i, name=f"item-{i:03d}", active=i not in skip)
        for i in range(1, count + 1)
    ]
    session.add_all(items)
    session.commit()
    return items


class ListDataSource:
    """内存数据源：descriptor 为过滤函数（或 None 表示不过滤），记录每次调用"""

    def __init__(self, rows: List[Any], fail_on: Optional[str] = None, error: Optional[BaseException] = None):
        self.rows = list(rows)
        self.fail_on = fail_on
        self.error = error
        self.calls: List[tuple] = []

    def _filtered(self, descriptor: Optional[Callable[[Any], bool]]) -> List[Any]:
        if descriptor is None:
            return list(self.rows)
        return [row for row in self.rows if descriptor(row)]

    def count(self, descriptor) -> int:
        self.calls.append(("count",))
        if self.fail_on == "count":
            raise self.error
        return len(self._filtered(descriptor))

    def fetch_range(self, descriptor, limit, offset, destination) -> None:
        self.calls.append(("fetch", limit, offset))
        if self.fail_on == "fetch":
            raise self.error
        destination[:] = self._filtered(descriptor)[offset:offset + limit]

    def fetches(self) -> List[tuple]:
        return [call for call in self.calls if call[0] == "fetch"]
