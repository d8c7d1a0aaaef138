# ==============================================
# KeyValueStore (interface)
# ==============================================
#
# PURPOSE:
#   The seam every store persists through. A key maps to exactly one
#   JSON-serializable value; writing a key replaces the whole value.
#
# CONTRACT:
# ---------
#   - get(key) -> Any | None
#       None when the key is absent OR its stored value cannot be
#       decoded. Read failures never reach the caller.
#   - set(key, value) -> None
#       Serialize and store the full value. Write failures propagate.
#   - delete(key) -> None
#       No-op when the key is absent.
#   - exists(key) -> bool
#   - keys() -> list[str]
#   - clear() -> None
#   - close() -> None
#
#   Keys are restricted to letters, digits, "_", "-" and "."
#   (they become file names in the file backend).
#
# ==============================================

import re
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ewaste.errors import StorageError

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_key(key: str) -> str:
    if not isinstance(key, str) or not _KEY_PATTERN.match(key) or key.startswith("."):
        raise StorageError(f"Invalid storage key: {key!r}")
    return key


class KeyValueStore(ABC):
    """Abstract JSON key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def close(self) -> None:
        """Release any connection held by the backend."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
