# conftest.py
"""Pytest 공용 fixture. 테스트마다 새 메모리 저장소와 스토어를 만들어 서로 격리합니다."""

import pytest

from yaopets import create_store
from yaopets.services.demo_data import seed_demo_data
from yaopets.services.storage_backend import MemoryBackend


@pytest.fixture
def backend():
    """브라우저 프로필 하나에 해당하는 저장소."""
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return create_store('testing', backend=backend)


@pytest.fixture
def reopen(backend):
    """같은 저장소 위에 새 스토어를 연다 (페이지 새로고침 / 다른 탭)."""
    return lambda: create_store('testing', backend=backend)


@pytest.fixture
def seeded_store(store):
    """데모 사용자 1~8, 게시글 101~108 이 들어 있는 스토어."""
    seed_demo_data(store)
    return store
