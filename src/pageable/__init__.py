"""
pageable：基于查询描述的分页元数据与翻页。

    from pageable import fetch_page

    page = fetch_page(1, 20, session.query(User).filter(User.active.is_(True)))
    page.next_page()
"""

from pageable.config import (  # noqa: F401
    PageConfig,
    Settings,
    configure_default_page_size,
    configure_fault_handler,
    configure_first_page_convention,
    get_config,
    reset_config,
)
from pageable.exceptions import (  # noqa: F401
    ConfigError,
    DataSourceError,
    FaultCondition,
    PageableError,
    QueryError,
)
from pageable.page import PageResult  # noqa: F401
from pageable.repositories import DataSource, SQLAlchemyDataSource  # noqa: F401
from pageable.services.page_query import Paginator, fetch_page  # noqa: F401
from pageable.utils.pagination import PageMeta, PageRequest, PageWindow, derive_metadata, derive_window  # noqa: F401
from pageable.utils.recovery import log_and_raise, log_and_swallow  # noqa: F401

__version__ = "0.1.0"
