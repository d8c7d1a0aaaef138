# ==============================================
# ClassificationStore
# ==============================================
#
# PURPOSE:
#   Owns the list of classification records, newest first, and
#   mirrors it to the "classifications" key on every append.
#
# CONTRACT:
# ---------
#   - add(new) -> ClassificationRecord
#       Validate (NewClassification or camelCase dict), assign id and
#       timestamp, persist, then prepend in memory. A failed write
#       raises and leaves the list unchanged.
#   - get_by_user(user_id) -> list    (newest first)
#   - get_all() -> list               (newest first, every owner)
#   - get(record_id) -> record | None
#
#   Records are never updated or deleted.
#
# ==============================================

from typing import Any, Dict, List, Optional, Union

from ewaste.domain import NewClassification, ClassificationRecord
from ewaste.ids import IdFactory
from ewaste.persistence import KeyValueStore
from .collection import load_collection
from .seed import seed_classifications


class ClassificationStore:
    STORAGE_KEY = "classifications"

    def __init__(self, kv: KeyValueStore, id_factory: Optional[IdFactory] = None):
        self._kv = kv
        self._ids = id_factory or IdFactory()
        self._records: List[ClassificationRecord] = load_collection(
            kv,
            self.STORAGE_KEY,
            parse=ClassificationRecord.from_dict,
            seed=seed_classifications,
            label="classifications",
        )
        self._ids.observe(r.id for r in self._records)

    def add(self, new: Union[NewClassification, Dict[str, Any]]) -> ClassificationRecord:
        """
        Store a new classification result.

        Args:
            new: The result to store, without id / createdAt

        Returns:
            The stored record

        Raises:
            ValidationError: if any field is out of range or missing
        """
        if not isinstance(new, NewClassification):
            new = NewClassification.from_dict(new)

        record = ClassificationRecord.create(new, record_id=self._ids.next_id(), created_at=self._ids.now())
        records = [record] + self._records
        self._persist(records)
        self._records = records
        return record

    def get_by_user(self, user_id: str) -> List[ClassificationRecord]:
        return [r for r in self._records if r.user_id == user_id]

    def get_all(self) -> List[ClassificationRecord]:
        return list(self._records)

    def get(self, record_id: str) -> Optional[ClassificationRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    def __len__(self) -> int:
        return len(self._records)

    def _persist(self, records: List[ClassificationRecord]) -> None:
        self._kv.set(self.STORAGE_KEY, [r.to_dict() for r in records])
