from ewaste.config import AppConfig
from .key_value_store import KeyValueStore
from .json_file_store import JsonFileStore
from .mongo_store import MongoKeyValueStore


def create_store(config: AppConfig) -> KeyValueStore:
    """
    Build the key-value store selected by config.storage.backend.

    The mongo backend is connected before it is returned.
    """
    if config.storage.backend == "mongo":
        store = MongoKeyValueStore(
            host=config.mongo.host,
            port=config.mongo.port,
            database=config.mongo.database,
            collection=config.mongo.collection,
            user=config.mongo.user,
            password=config.mongo.password
        )
        store.connect()
        return store

    return JsonFileStore(config.storage.data_dir)
