# ==============================================
# PERSISTENCE (State across restarts)
# ==============================================
#
# This package stores every piece of application state as one
# JSON value under a fixed key, so the stores can recover their
# collections after a restart.
#
# Modules:
# --------
# - key_value_store.py  → Abstract interface shared by the backends
# - json_file_store.py  → One <key>.json file per key in a directory
# - mongo_store.py      → One MongoDB document per key
# - factory.py          → Pick the backend from AppConfig
#
# ==============================================

from .key_value_store import KeyValueStore
from .json_file_store import JsonFileStore
from .mongo_store import MongoKeyValueStore
from .factory import create_store

__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MongoKeyValueStore",
    "create_store"
]
