"""
分页数据源

编排器只依赖 DataSource 能力（count / fetch_range），不关心 Session 细节。
"""

from .sqlalchemy_source import DataSource, SQLAlchemyDataSource  # noqa: F401
