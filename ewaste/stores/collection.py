from typing import Callable, List, TypeVar

from ewaste.errors import ValidationError
from ewaste.persistence import KeyValueStore

T = TypeVar("T")


def load_collection(kv: KeyValueStore, key: str, parse: Callable[[dict], T],
                    seed: Callable[[], List[T]], label: str,
                    seed_when_empty: bool = True) -> List[T]:
    """
    Load a persisted newest-first list, falling back to seed data.

    The seed is used when the key is absent, unreadable, not a list, or
    every stored entry is malformed. Malformed entries are skipped
    individually.

    Args:
        kv: Key-value store to read from
        key: Storage key of the list
        parse: Converts one stored dict into an entry (raises ValidationError)
        seed: Factory for the built-in entries
        label: Name used in status messages
        seed_when_empty: Also seed when the stored list is `[]`. Turn off
            for collections that can legitimately be emptied.
    """
    raw = kv.get(key)
    if raw is not None and not isinstance(raw, list):
        print(f"⚠ Stored {label} are not a list, using seed data")
        raw = None

    if raw == [] and not seed_when_empty:
        return []

    entries: List[T] = []
    for item in raw or []:
        try:
            entries.append(parse(item))
        except ValidationError as e:
            print(f"⚠ Skipping malformed {label} entry: {e}")

    if not entries:
        entries = seed()
        print(f"✓ No stored {label} found, starting with {len(entries)} seed entries")
    return entries
