"""
pytest 配置文件
"""
from typing import Generator, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pageable import reset_config

from helpers import Base, Item, seed_items


@pytest.fixture(autouse=True)
def _fresh_config():
    # 进程级配置在用例间共享，每个用例前后恢复初始值
    reset_config()
    yield
    reset_config()


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hundred_items(db_session: Session) -> List[Item]:
    return seed_items(db_session, 100)
