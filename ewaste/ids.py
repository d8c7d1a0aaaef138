# ==============================================
# IdFactory
# ==============================================
#
# PURPOSE:
#   Mint ids for identities, classification records and listings,
#   and hand out the "current time" used for created_at stamps.
#
# RULES:
#   - Ids are the creation time in epoch milliseconds, as strings.
#   - Ids are strictly increasing within one factory: when the clock
#     has not advanced since the last id, the next id is last + 1.
#   - observe(ids) bumps the floor past ids loaded from storage so a
#     restarted process never re-issues an existing id.
#
#   One factory is shared by every store of an AppContext.
#
# ==============================================

from datetime import datetime, timezone
from typing import Callable, Iterable, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IdFactory:
    """Monotonic, creation-time based id source with an injectable clock."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utc_now
        self._last = 0

    def now(self) -> datetime:
        return self._clock()

    def next_id(self) -> str:
        millis = int(self.now().timestamp() * 1000)
        if millis <= self._last:
            millis = self._last + 1
        self._last = millis
        return str(millis)

    def observe(self, ids: Iterable[str]) -> None:
        """Make sure future ids sort after every numeric id in `ids`."""
        for value in ids:
            try:
                numeric = int(value)
            except (TypeError, ValueError):
                continue
            if numeric > self._last:
                self._last = numeric
