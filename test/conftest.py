import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from erpdash.application.seed import SeedData  # noqa: E402
from erpdash.application.store import DomainStore  # noqa: E402
from erpdash.repositories.collection_repo import CollectionRepository  # noqa: E402
from erpdash.repositories.kv_storage import SqliteKeyValueStorage  # noqa: E402


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingStorage(SqliteKeyValueStorage):
    def __init__(self, db_path):
        super().__init__(db_path)
        self.writes: list[str] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        super().set(key, value)


def empty_seed() -> SeedData:
    return SeedData(products=[], sales=[], notifications=[], users=[])


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 15, 10, 30, 0, 123456))


@pytest.fixture
def storage(tmp_path: Path):
    s = RecordingStorage(tmp_path / "storage.db")
    s.init_db()
    return s


@pytest.fixture
def store(storage, clock):
    st = DomainStore(CollectionRepository(storage), clock=clock, seed_factory=empty_seed)
    st.load()
    storage.writes.clear()
    return st
