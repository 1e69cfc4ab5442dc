"""
分页异常定义

统一的异常层级，保持与业务异常一致的结构（message / error_code / details）。
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """错误代码枚举"""

    INVALID_CONFIG = "INVALID_CONFIG"
    DATA_SOURCE_ERROR = "DATA_SOURCE_ERROR"
    QUERY_FAILED = "QUERY_FAILED"
    FAULT = "FAULT"


class PageableError(Exception):
    """分页异常基类"""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.QUERY_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigError(PageableError, ValueError):
    """配置值非法（拒绝写入，原配置保持不变）"""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_CONFIG,
            details={**({"field": field} if field else {}), "value": value},
        )


class DataSourceError(PageableError):
    """数据源在 count / fetch 阶段报告的失败"""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.DATA_SOURCE_ERROR,
            details={**({"operation": operation} if operation else {}), **(details or {})},
        )
        self.operation = operation


class QueryError(PageableError):
    """分页查询失败，__cause__ 为底层 DataSourceError"""

    def __init__(self, message: str, stage: str, page: Optional[int] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.QUERY_FAILED,
            details={"stage": stage, "page": page},
        )
        self.stage = stage
        self.page = page


class FaultCondition(PageableError):
    """分页过程中的意外运行时错误，交给故障处理器"""

    def __init__(self, original: BaseException, page: Optional[int] = None):
        super().__init__(
            message=f"分页查询发生意外错误: {original!r}",
            error_code=ErrorCode.FAULT,
            details={"page": page, "exception_type": type(original).__name__},
        )
        self.original = original
        self.page = page


__all__ = [
    "ErrorCode",
    "PageableError",
    "ConfigError",
    "DataSourceError",
    "QueryError",
    "FaultCondition",
]
