"""
Global test configuration and fixtures
"""

import os

# 테스트 프로필: ERROR 로그만 (rtags import 전에 설정)
os.environ.setdefault("RTAGS_LOG_PROFILE", "test")

import pytest

from rtags.index import TagIndex
from rtags.infra.config import IndexConfig
from tests.fakes import FakeTagStore


@pytest.fixture
def store() -> FakeTagStore:
    """In-memory set store"""
    return FakeTagStore()


@pytest.fixture
def index(store) -> TagIndex:
    """'docs' 네임스페이스 인덱스 (guarded remove)"""
    return TagIndex("docs", store)


@pytest.fixture
def unguarded_index(store) -> TagIndex:
    """비보호 read-then-write remove 인덱스"""
    return TagIndex("docs", store, IndexConfig(guarded_remove=False))


# Pytest hooks
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (mocked Redis)")


def pytest_collection_modifyitems(config, items):
    """경로 기반 자동 마커 추가"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
