"""
基于 SQLAlchemy 的分页数据源

只执行分页需要的两个只读操作：先 count，再按 limit/offset 取一段。
描述对象可以是 2.0 风格的 Select（通过绑定的 Session 执行），
也可以是自带 Session 的旧式 Query。
"""

from __future__ import annotations

from typing import Any, MutableSequence, Optional, Protocol, runtime_checkable

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from pageable.exceptions import DataSourceError


@runtime_checkable
class DataSource(Protocol):
    """编排器使用的数据源能力"""

    def count(self, descriptor: Any) -> int: ...

    def fetch_range(
        self,
        descriptor: Any,
        limit: int,
        offset: int,
        destination: MutableSequence[Any],
    ) -> None: ...


class SQLAlchemyDataSource:
    """包装 SQLAlchemy Session 的数据源"""

    def __init__(self, session: Optional[Session] = None) -> None:
        self._session = session

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def count(self, descriptor: Any) -> int:
        try:
            if isinstance(descriptor, Query):
                # count() 会包一层子查询，先去掉排序和已有的 limit/offset
                return int(descriptor.order_by(None).limit(None).offset(None).count())
            stmt = self._as_select(descriptor).order_by(None).limit(None).offset(None)
            total = self._require_session().scalar(
                select(func.count()).select_from(stmt.subquery())
            )
            return int(total or 0)
        except SQLAlchemyError as exc:
            raise DataSourceError(f"count failed: {exc}", operation="count") from exc

    def fetch_range(
        self,
        descriptor: Any,
        limit: int,
        offset: int,
        destination: MutableSequence[Any],
    ) -> None:
        try:
            if isinstance(descriptor, Query):
                rows = descriptor.limit(limit).offset(offset).all()
            else:
                stmt = self._as_select(descriptor).limit(limit).offset(offset)
                result = self._require_session().execute(stmt)
                # 单实体 / 单列的 Select 返回标量，与 Query.all() 一致
                if len(stmt.column_descriptions) == 1:
                    rows = result.scalars().all()
                else:
                    rows = result.all()
        except SQLAlchemyError as exc:
            raise DataSourceError(f"fetch failed: {exc}", operation="fetch") from exc
        destination[:] = rows

    def _require_session(self) -> Session:
        if self._session is None:
            raise DataSourceError("a Session is required to execute Select statements", operation="bind")
        return self._session

    @staticmethod
    def _as_select(descriptor: Any) -> Select:
        if not isinstance(descriptor, Select):
            raise TypeError(
                f"descriptor must be a sqlalchemy Select or Query, got {type(descriptor).__name__}"
            )
        return descriptor
