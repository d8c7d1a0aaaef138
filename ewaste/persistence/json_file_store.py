import json
import os
from pathlib import Path
from typing import Any, List, Optional

from .key_value_store import KeyValueStore, validate_key


# ==============================================
# JsonFileStore
# ==============================================
#
# PURPOSE:
#   Persist each key's value as a JSON file on disk so that the
#   session, the classification records and the marketplace listings
#   survive a restart of the process.
#
# FILE STRUCTURE:
# ---------------
#   data/
#   ├── session_token.json          → "…opaque marker…"
#   ├── current_identity.json       → {id, name, email, role}
#   ├── credential_roster.json      → [{email, password, name, role, userId}]
#   ├── classifications.json        → [{id, userId, objectName, …}]
#   ├── marketplace_listings.json   → [{id, sellerId, title, …}]
#   └── carbon_calculator_<id>.json → {transportData, homeData, …}
#
#   Writes go to "<key>.json.tmp" first and are moved into place with
#   os.replace, so a reader never sees a half-written file. A failed
#   write removes the .tmp file and re-raises.
#
#   Two processes writing the same key: the last write wins.
#
class JsonFileStore(KeyValueStore):
    """
    Key-value store backed by one JSON file per key.
    """

    def __init__(self, storage_dir: str = "data/"):
        """
        Initialize the file store.

        Args:
            storage_dir: Directory to store the JSON files in
        """
        self.storage_dir = Path(storage_dir)

        # Create directory if it doesn't exist
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{validate_key(key)}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Load the value stored under `key`.

        Returns:
            The decoded JSON value.
            None if the file doesn't exist or cannot be decoded
        """
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            print(f"⚠ Ignoring unreadable value for '{key}' in {path}: {e}")
            return None

    def set(self, key: str, value: Any) -> None:
        """
        Save `value` under `key`, replacing any previous value.

        Args:
            key: Storage key
            value: JSON-serializable value
        """
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")

        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            # Previous value stays in place; drop the partial write
            tmp_path.unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def keys(self) -> List[str]:
        return sorted(path.stem for path in self.storage_dir.glob("*.json"))

    def clear(self) -> None:
        """
        Delete every stored key (for testing or reset).
        """
        for key in self.keys():
            self._path(key).unlink()
            print(f"🗑️  Deleted {key}")

        print(f"✓ Cleared {self.storage_dir}")
