"""
分页查询编排

一次"取第 N 页"：先 count，再按 limit/offset 取数，最后结合计算结果组装 PageResult。
- 每次调用都重新 count，不做缓存；
- 数据源失败（count 或 fetch）立即以 QueryError 抛出，不返回部分结果；
- 其他意外异常包装为 FaultCondition 交给配置的故障处理器。
"""
from __future__ import annotations

import time
from collections.abc import MutableSequence
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from pageable.config import PageConfig, get_config
from pageable.exceptions import DataSourceError, FaultCondition, PageableError, QueryError
from pageable.page import PageResult
from pageable.repositories import DataSource, SQLAlchemyDataSource
from pageable.utils.page_logger import PageAction, PageStatus, StructuredPageLogger, page_logger
from pageable.utils.pagination import PageRequest, derive_metadata, derive_window, page_index
from pageable.utils.performance import QueryMonitor, monitor_query, query_monitor

R = TypeVar("R")


def _ensure_destination(destination: Any) -> MutableSequence:
    if destination is None:
        return []
    if not isinstance(destination, MutableSequence):
        raise TypeError(
            f"destination must be a mutable sequence such as a list, got {type(destination).__name__}"
        )
    return destination


class Paginator:
    """分页编排器。

    Args:
        source: 数据源；默认使用不绑定 Session 的 SQLAlchemyDataSource（适用于 Query 描述）
        config: 显式配置；为 None 时每次调用读取进程级配置快照
    """

    def __init__(
        self,
        source: Optional[DataSource] = None,
        config: Optional[PageConfig] = None,
        *,
        monitor: Optional[QueryMonitor] = None,
        event_logger: Optional[StructuredPageLogger] = None,
    ) -> None:
        if config is not None:
            config.validate()
        self.source = source if source is not None else SQLAlchemyDataSource()
        self._config = config
        self.monitor = monitor or query_monitor
        self.events = event_logger or page_logger

    @property
    def config(self) -> PageConfig:
        return self._config if self._config is not None else get_config()

    def fetch(
        self,
        requested_page: int,
        page_size: int,
        descriptor: Any,
        destination: Optional[MutableSequence] = None,
    ) -> Optional[PageResult]:
        """取指定页，数据源失败时抛出 QueryError。

        故障处理器未抛出异常时返回 None。
        """
        destination = _ensure_destination(destination)
        config = self.config
        try:
            return self._fetch(config, PageRequest(requested_page, page_size), descriptor, destination)
        except PageableError:
            raise
        except Exception as exc:
            fault = FaultCondition(exc, page=requested_page)
            self.events.log_event(
                PageAction.PAGE,
                PageStatus.FAULT,
                page=requested_page,
                page_size=page_size,
                error_code=fault.error_code,
                error_message=repr(exc),
            )
            config.fault_handler(fault)
            return None

    def _fetch(
        self,
        config: PageConfig,
        request: PageRequest,
        descriptor: Any,
        destination: MutableSequence,
    ) -> PageResult:
        started = time.perf_counter()
        request = request.normalized(config.default_page_size)
        window = derive_window(request.page, request.page_size, config.first_page_zero)

        total = self._call(PageAction.COUNT, request.page, lambda: self.source.count(descriptor))

        if page_index(request.page, config.first_page_zero) < 0:
            # 首页之前的页码：不取数，返回空页
            destination.clear()
        else:
            self._call(
                PageAction.FETCH,
                request.page,
                lambda: self.source.fetch_range(descriptor, window.limit, window.offset, destination),
                rows=lambda: len(destination),
            )

        meta = derive_metadata(request.page, request.page_size, total, config.first_page_zero)

        self.events.log_page(
            request.page,
            request.page_size,
            total,
            len(destination),
            int((time.perf_counter() - started) * 1000),
            offset=window.offset,
        )

        return PageResult(
            page_now=request.page,
            page_count=meta.page_count,
            total_row_count=total,
            page_size=request.page_size,
            items=destination,
            is_first_page=meta.is_first_page,
            is_last_page=meta.is_last_page,
            is_empty=meta.is_empty,
            start_row=meta.start_row,
            end_row=meta.end_row,
            descriptor=descriptor,
            first_page_value=config.first_page,
            paginator=self,
        )

    def _call(
        self,
        action: PageAction,
        requested_page: int,
        fn: Callable[[], R],
        rows: Optional[Callable[[], int]] = None,
    ) -> R:
        started = time.perf_counter()
        try:
            with monitor_query(self.monitor, f"pageable.{action.value}") as tally:
                result = fn()
                if rows is not None:
                    tally["rows"] = rows()
        except DataSourceError as exc:
            self.events.log_failure(action, requested_page, exc.error_code, exc.message)
            raise QueryError(
                f"{action.value} failed for page {requested_page}: {exc.message}",
                stage=action.value,
                page=requested_page,
            ) from exc
        self.events.log_call(
            action,
            requested_page,
            int((time.perf_counter() - started) * 1000),
            rows=result if action is PageAction.COUNT else tally["rows"],
        )
        return result


def fetch_page(
    page: int,
    page_size: int,
    descriptor: Any,
    destination: Optional[MutableSequence] = None,
    *,
    session: Optional[Session] = None,
    source: Optional[DataSource] = None,
) -> Optional[PageResult]:
    """使用进程级配置取一页。

    descriptor 为 Select 时需传入 session；为 Query 时可省略。
    session 与 source 只能二选一，同时传入时抛出 TypeError。
    """
    if session is not None and source is not None:
        raise TypeError("fetch_page() accepts either session or source, not both")
    paginator = Paginator(source if source is not None else SQLAlchemyDataSource(session))
    return paginator.fetch(page, page_size, descriptor, destination)


__all__ = ["Paginator", "fetch_page"]
