"""
分页故障处理器

分页过程中出现的意外异常（非数据源错误）会被包装为 FaultCondition
交给可配置的处理器：
- `log_and_raise`（默认）：记录堆栈后继续抛出；
- `log_and_swallow`：记录堆栈后吞掉异常，本次分页返回 None。
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from ..exceptions import FaultCondition

logger = logging.getLogger(__name__)

FaultHandler = Callable[[FaultCondition], None]


def _log_fault(fault: FaultCondition) -> None:
    original = fault.original
    logger.error(
        "Fault recovered: %r page=%s time=%s",
        original,
        fault.page,
        datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
        exc_info=(type(original), original, original.__traceback__),
    )


def log_and_raise(fault: FaultCondition) -> None:
    """记录故障与堆栈，然后以 FaultCondition 抛出"""
    _log_fault(fault)
    raise fault from fault.original


def log_and_swallow(fault: FaultCondition) -> None:
    """记录故障与堆栈后吞掉异常"""
    _log_fault(fault)


__all__ = ["FaultHandler", "log_and_raise", "log_and_swallow"]
