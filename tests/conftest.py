# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - clock     → FakeClock, a controllable "now"
# - ids       → IdFactory driven by the fake clock
# - kv        → JsonFileStore in a temporary directory
# - config    → AppConfig pointing at the same directory
# - ctx       → AppContext wired on kv / ids
# - fake_mongo → MongoKeyValueStore attached to an in-memory collection
# - failing_writes → make kv.set raise OSError for chosen keys
#
# ==============================================

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from ewaste.config import AppConfig, StorageConfig
from ewaste.context import AppContext
from ewaste.ids import IdFactory
from ewaste.persistence import JsonFileStore, MongoKeyValueStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeCollection:
    """The subset of a pymongo collection used by MongoKeyValueStore."""

    def __init__(self):
        self.docs = {}

    def find_one(self, query):
        doc = self.docs.get(query["_id"])
        return dict(doc) if doc is not None else None

    def replace_one(self, query, doc, upsert=False):
        if query["_id"] in self.docs or upsert:
            self.docs[query["_id"]] = dict(doc)

    def delete_one(self, query):
        self.docs.pop(query["_id"], None)

    def count_documents(self, query, limit=0):
        return 1 if query["_id"] in self.docs else 0

    def find(self, query, projection=None):
        return [{"_id": key} for key in self.docs]

    def delete_many(self, query):
        count = len(self.docs)
        self.docs.clear()
        return SimpleNamespace(deleted_count=count)


class WriteFailures:
    """Patches a store's set() so that writes to chosen keys raise OSError."""

    def __init__(self, kv, monkeypatch):
        self._kv = kv
        self._monkeypatch = monkeypatch
        self._real_set = kv.set

    def fail(self, *keys):
        def set_(key, value):
            if key in keys:
                raise OSError(f"No space left on device: {key}")
            self._real_set(key, value)

        self._monkeypatch.setattr(self._kv, "set", set_)

    def restore(self):
        self._monkeypatch.setattr(self._kv, "set", self._real_set)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids(clock):
    return IdFactory(clock)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def kv(data_dir):
    return JsonFileStore(str(data_dir))


@pytest.fixture
def config(data_dir):
    return AppConfig(storage=StorageConfig(data_dir=str(data_dir)))


@pytest.fixture
def ctx(config, kv, ids):
    return AppContext(config, store=kv, id_factory=ids)


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def fake_mongo(fake_collection):
    store = MongoKeyValueStore(host="localhost", port=27017, database="test", collection="kv")
    store.attach(fake_collection)
    return store


@pytest.fixture
def failing_writes(kv, monkeypatch):
    return WriteFailures(kv, monkeypatch)
