# ==============================================
# STORES (Domain state)
# ==============================================
#
# Each store exclusively owns one collection, keeps it in memory,
# and writes the full collection back to its key on every mutation.
#
# Modules:
# --------
# - session_store.py         → Current identity + credential roster
# - classification_store.py  → Append-only classification records
# - marketplace_store.py     → Marketplace listings (add / remove)
# - collection.py            → Shared load-or-seed helper
# - seed.py                  → Built-in seed entries
#
# ==============================================

from .session_store import SessionStore
from .classification_store import ClassificationStore
from .marketplace_store import MarketplaceStore

__all__ = [
    "SessionStore",
    "ClassificationStore",
    "MarketplaceStore"
]
