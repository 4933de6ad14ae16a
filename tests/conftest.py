import pytest
from fastapi.testclient import TestClient

from scoreboard.app import create_app
from scoreboard.config import Settings
from scoreboard.errors import StorageUnavailable
from scoreboard.store import MemoryScoreStore, SqliteScoreStore


class BrokenStore:
    """Store whose backend is always down."""

    def insert(self, value):
        raise StorageUnavailable("database is locked")

    def top(self, n):
        raise StorageUnavailable("database is locked")

    def count(self):
        return 0


class CrashingStore:
    """Store that fails with something other than a storage error."""

    def insert(self, value):
        raise RuntimeError("unexpected driver state")

    def top(self, n):
        raise RuntimeError("unexpected driver state")

    def count(self):
        return 0


@pytest.fixture
def memory_store():
    return MemoryScoreStore()


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteScoreStore(str(tmp_path / "scores.db"))


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryScoreStore()
    return SqliteScoreStore(str(tmp_path / "scores.db"))


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store, settings=Settings()))


@pytest.fixture
def crashing_client():
    return TestClient(create_app(CrashingStore(), settings=Settings()))


@pytest.fixture
def broken_client(broken_store):
    return TestClient(create_app(broken_store, settings=Settings()))
