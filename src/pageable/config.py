import os
import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional

from pageable.exceptions import ConfigError
from pageable.utils.recovery import FaultHandler, log_and_raise


logger = logging.getLogger(__name__)


@dataclass
class Settings:
    # 默认每页条数（单次调用传入的 page_size < 1 时回退到该值）
    default_page_size: int = int(os.getenv("PAGEABLE_DEFAULT_PAGE_SIZE", "25"))
    # 首页约定：false 表示第一页为 1，true 表示第一页为 0
    first_page_zero: bool = os.getenv("PAGEABLE_FIRST_PAGE_ZERO", "false").lower() == "true"
    # 慢查询阈值（秒）
    slow_query_threshold: float = float(os.getenv("PAGEABLE_SLOW_QUERY_THRESHOLD", "0.5"))
    # 结构化日志目录（未设置则仅输出到控制台）
    log_dir: Optional[str] = os.getenv("PAGEABLE_LOG_DIR")
    log_retention_days: int = int(os.getenv("PAGEABLE_LOG_RETENTION_DAYS", "30"))


@dataclass(frozen=True)
class PageConfig:
    """分页配置（从 Settings 派生，不可变；修改时整体替换）"""
    default_page_size: int = 25
    first_page_zero: bool = False
    fault_handler: FaultHandler = log_and_raise

    @classmethod
    def from_settings(cls, settings: Settings) -> "PageConfig":
        return cls(
            default_page_size=settings.default_page_size,
            first_page_zero=settings.first_page_zero,
        )

    @property
    def first_page(self) -> int:
        return 0 if self.first_page_zero else 1

    def last_page(self, page_count: int) -> int:
        """给定总页数时，最后一页的页码（遵循首页约定）"""
        return page_count - 1 + self.first_page

    def validate(self) -> None:
        """配置校验"""
        if isinstance(self.default_page_size, bool) or not isinstance(self.default_page_size, int):
            raise ConfigError("default_page_size must be an integer", field="default_page_size", value=self.default_page_size)
        if self.default_page_size < 1:
            raise ConfigError("default_page_size must be >= 1", field="default_page_size", value=self.default_page_size)
        if not callable(self.fault_handler):
            raise ConfigError("fault_handler must be callable", field="fault_handler", value=self.fault_handler)


settings = Settings()

# 进程级配置：启动阶段设置一次，之后视为只读。
# 写入通过锁串行化；读取拿到的是不可变快照。
_config_lock = threading.Lock()
_config = PageConfig.from_settings(settings)
_config.validate()


def get_config() -> PageConfig:
    with _config_lock:
        return _config


def _update(**changes) -> PageConfig:
    global _config
    with _config_lock:
        candidate = replace(_config, **changes)
        candidate.validate()
        _config = candidate
        return candidate


def configure_default_page_size(page_size: int) -> PageConfig:
    """设置默认每页条数，非法值抛出 ConfigError 且不修改现有配置"""
    config = _update(default_page_size=page_size)
    logger.info("pageable default page size set to %s", page_size)
    return config


def configure_first_page_convention(zero_indexed: bool) -> PageConfig:
    config = _update(first_page_zero=bool(zero_indexed))
    logger.info("pageable first page set to %s", config.first_page)
    return config


def configure_fault_handler(handler: FaultHandler) -> PageConfig:
    return _update(fault_handler=handler)


def reset_config() -> PageConfig:
    """恢复为环境变量派生的初始配置（主要用于测试）"""
    global _config
    fresh = PageConfig.from_settings(settings)
    fresh.validate()
    with _config_lock:
        _config = fresh
    return fresh
