"""
数据源调用耗时监控

按操作名（pageable.count / pageable.fetch）累计调用次数、失败次数、行数与耗时，
超过阈值的调用记为慢查询并告警。
"""
import time
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict

from ..config import settings

logger = logging.getLogger(__name__)


@dataclass
class OperationStats:
    calls: int = 0
    failures: int = 0
    rows: int = 0
    total_time: float = 0.0
    max_time: float = 0.0
    slow_calls: int = 0

    @property
    def avg_time(self) -> float:
        return self.total_time / self.calls if self.calls else 0.0


class QueryMonitor:
    """数据源调用监控器（线程安全）"""

    def __init__(self, slow_query_threshold: float = 0.5):
        self.slow_query_threshold = slow_query_threshold  # 秒
        self._stats: Dict[str, OperationStats] = {}
        self._lock = threading.Lock()

    def record(self, operation: str, duration: float, rows: int = 0, failed: bool = False) -> None:
        slow = duration > self.slow_query_threshold
        with self._lock:
            stats = self._stats.setdefault(operation, OperationStats())
            stats.calls += 1
            stats.total_time += duration
            stats.max_time = max(stats.max_time, duration)
            if failed:
                stats.failures += 1
            else:
                stats.rows += rows
            if slow:
                stats.slow_calls += 1

        if slow:
            logger.warning(
                f"Slow query detected: {operation} took {duration:.3f}s "
                f"(threshold: {self.slow_query_threshold}s), rows: {rows}"
            )

    def snapshot(self) -> Dict[str, OperationStats]:
        """返回统计副本"""
        with self._lock:
            return {op: replace(stats) for op, stats in self._stats.items()}


# 全局监控器实例
query_monitor = QueryMonitor(settings.slow_query_threshold)


@contextmanager
def monitor_query(monitor: QueryMonitor, operation: str):
    """计时一段数据源调用；yield 出的 dict 可写入 rows 记录返回行数。

    失败时记录耗时与错误后继续抛出。
    """
    tally = {"rows": 0}
    start_time = time.perf_counter()
    try:
        yield tally
    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error(f"Query failed: {operation} in {duration:.3f}s, error: {str(e)}")
        monitor.record(operation, duration, failed=True)
        raise
    monitor.record(operation, time.perf_counter() - start_time, tally["rows"])
