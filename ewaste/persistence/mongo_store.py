# ==============================================
# MongoKeyValueStore
# ==============================================
#
# PURPOSE:
#   Same key-value contract as JsonFileStore, held in one MongoDB
#   collection instead of a local directory. Several processes
#   pointed at the same collection share one source of truth.
#
# DOCUMENT SHAPE:
# ---------------
#   {"_id": "<key>", "payload": "<JSON text of the value>"}
#
#   The value is kept as JSON text so that a document written by
#   something else (wrong type, broken text) reads back as "no prior
#   state", exactly like a corrupt file in the file backend.
#
# CLASS: MongoKeyValueStore
# -------------------------
#   Stateful: holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, collection, user=None, password=None)
#       Store connection params. Doesn't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Ping the server; StorageError when it is unreachable or the
#       login is rejected.
#   - disconnect() -> None
#   - attach(collection) -> None
#       Use an already-open collection object (tests inject a fake).
#   - get / set / delete / exists / keys / clear
#
# ==============================================

import json
from typing import Any, List, Optional

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from ewaste.errors import StorageError
from .key_value_store import KeyValueStore, validate_key


class MongoKeyValueStore(KeyValueStore):
    def __init__(self, host, port, database, collection="kv", user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.collection_name = collection
        self.user = user
        self.password = password
        self.client = None  # Will hold the actual MongoDB client connection
        self._collection = None

    def connect(self):
        """
        Open the client, check it answers a ping, and select the collection.

        Credentials go to MongoClient as keyword arguments, so user names
        and passwords containing "@", ":" or "/" need no escaping.

        Raises:
            StorageError: if the server is unreachable or rejects the login
        """
        options = {"host": self.host, "port": self.port}
        if self.user and self.password:
            options.update(username=self.user, password=self.password, authSource=self.database)

        client = PyMongoClient(**options)
        try:
            client.admin.command("ping")
        except (ConnectionFailure, OperationFailure) as e:
            client.close()
            raise StorageError(f"Could not connect to MongoDB at {self.host}:{self.port}: {e}") from e

        self.client = client
        self._collection = client[self.database][self.collection_name]
        print(f"✓ Connected to MongoDB {self.host}:{self.port}/{self.database}.{self.collection_name}")

    def disconnect(self):
        # Close connection.
        if self.client:
            self.client.close()
            print("✓ Disconnected from MongoDB.")
            self.client = None
        self._collection = None

    def attach(self, collection):
        self._collection = collection

    def close(self) -> None:
        self.disconnect()

    def _coll(self):
        if self._collection is None:
            raise StorageError("Not connected to MongoDB.")
        return self._collection

    def get(self, key: str) -> Optional[Any]:
        doc = self._coll().find_one({"_id": validate_key(key)})
        if doc is None:
            return None
        try:
            return json.loads(doc["payload"])
        except (KeyError, TypeError, json.JSONDecodeError) as e:
            print(f"⚠ Ignoring unreadable value for '{key}' in MongoDB: {e}")
            return None

    def set(self, key: str, value: Any) -> None:
        key = validate_key(key)
        self._coll().replace_one(
            {"_id": key},
            {"_id": key, "payload": json.dumps(value)},
            upsert=True
        )

    def delete(self, key: str) -> None:
        self._coll().delete_one({"_id": validate_key(key)})

    def exists(self, key: str) -> bool:
        return self._coll().count_documents({"_id": validate_key(key)}, limit=1) > 0

    def keys(self) -> List[str]:
        return sorted(doc["_id"] for doc in self._coll().find({}, {"_id": 1}))

    def clear(self) -> None:
        result = self._coll().delete_many({})
        print(f"✓ Cleared {result.deleted_count} keys from MongoDB")
