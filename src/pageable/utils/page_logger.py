"""
分页结构化日志

以 JSON 行记录 count / fetch / page 事件，配置了日志目录时按天轮转写入文件。
"""
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from ..config import settings


class PageAction(str, Enum):
    """分页操作类型"""
    COUNT = "count"
    FETCH = "fetch"
    PAGE = "page"


class PageStatus(str, Enum):
    """操作状态"""
    OK = "ok"
    FAILED = "failed"
    FAULT = "fault"


class StructuredPageLogger:
    """分页结构化日志记录器"""

    def __init__(self, name: str = "query", log_dir: Optional[str] = None, retention_days: int = 30):
        self.logger = logging.getLogger(f"pageable.{name}")
        self.log_dir = log_dir
        self.retention_days = retention_days
        self._setup_logger()

    def _setup_logger(self) -> None:
        if self.logger.handlers:
            return  # 已配置

        self.logger.setLevel(logging.INFO)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(console_handler)

        if not self.log_dir:
            return

        log_dir = Path(self.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=log_dir / "pageable.log",
            when="midnight",
            interval=1,
            backupCount=self.retention_days,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(file_handler)

    def log_event(
        self,
        action: PageAction,
        status: PageStatus,
        *,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        total: Optional[int] = None,
        rows: Optional[int] = None,
        latency_ms: Optional[int] = None,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """记录结构化事件"""
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": action.value,
            "status": status.value,
        }

        for key, value in (
            ("page", page),
            ("page_size", page_size),
            ("limit", limit),
            ("offset", offset),
            ("total", total),
            ("rows", rows),
            ("latency_ms", latency_ms),
        ):
            if value is not None:
                event[key] = value
        if error_code:
            event["error_code"] = error_code
        if error_message:
            event["error_message"] = error_message
        if extra:
            event["extra"] = extra

        if status == PageStatus.OK:
            self.logger.info(json.dumps(event, ensure_ascii=False, default=str))
        else:
            self.logger.error(json.dumps(event, ensure_ascii=False, default=str))

    def log_page(self, page: int, page_size: int, total: int, rows: int, latency_ms: int, **kwargs: Any) -> None:
        """记录一次分页完成"""
        self.log_event(
            PageAction.PAGE,
            PageStatus.OK,
            page=page,
            page_size=page_size,
            total=total,
            rows=rows,
            latency_ms=latency_ms,
            extra=kwargs or None,
        )

    def log_call(self, action: PageAction, page: int, latency_ms: int, rows: Optional[int] = None, **kwargs: Any) -> None:
        """记录一次数据源调用（count / fetch）成功"""
        self.log_event(
            action,
            PageStatus.OK,
            page=page,
            rows=rows,
            latency_ms=latency_ms,
            extra=kwargs or None,
        )

    def log_failure(self, action: PageAction, page: int, error_code: str, error_message: str, **kwargs: Any) -> None:
        """记录数据源失败"""
        self.log_event(
            action,
            PageStatus.FAILED,
            page=page,
            error_code=error_code,
            error_message=error_message,
            extra=kwargs or None,
        )


class JSONFormatter(logging.Formatter):
    """JSON格式化器"""

    def format(self, record: logging.LogRecord) -> str:
        # 消息本身已是 JSON 时直接输出
        try:
            json.loads(record.getMessage())
            return record.getMessage()
        except (json.JSONDecodeError, ValueError):
            pass

        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


# 全局日志实例
page_logger = StructuredPageLogger(log_dir=settings.log_dir, retention_days=settings.log_retention_days)
