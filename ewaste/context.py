# ==============================================
# AppContext — Application wiring
# ==============================================
#
# PURPOSE:
#   Builds every service exactly once and hands them to whoever
#   needs them (the CLI, tests, an embedding application). There are
#   no module-level store singletons: two contexts over two storage
#   directories are fully independent.
#
#   ┌──────────────────────────────────────────────┐
#   │                 AppContext                   │
#   │                                              │
#   │   AppConfig ──► create_store() ──► kv        │
#   │                                    │         │
#   │        ┌──────────────┬────────────┼──────┐  │
#   │        ▼              ▼            ▼      ▼  │
#   │   SessionStore  Classification  Market- Calc │
#   │                 Store           place   Store│
#   │                                 Store        │
#   └──────────────────────────────────────────────┘
#
#   One IdFactory is shared so ids stay unique across stores.
#
# CONVENIENCE OPERATIONS (act as the current identity):
# -----------------------------------------------------
#   - require_user() -> Identity         (raises NotAuthenticated)
#   - classify(...) -> ClassificationRecord
#   - post_listing(...) -> MarketplaceListing
#   - remove_listing(listing_id) -> bool
#
# ==============================================

from typing import Optional, Sequence

from ewaste.calculator import CalculatorStore
from ewaste.config import AppConfig, get_config
from ewaste.domain import (
    Identity,
    NewClassification,
    ClassificationRecord,
    NewListing,
    MarketplaceListing,
)
from ewaste.errors import NotAuthenticated
from ewaste.ids import IdFactory
from ewaste.persistence import KeyValueStore, create_store
from ewaste.stores import SessionStore, ClassificationStore, MarketplaceStore


class AppContext:
    """
    Owns the key-value store and every domain store built on it.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 store: Optional[KeyValueStore] = None,
                 id_factory: Optional[IdFactory] = None):
        """
        Args:
            config: Application configuration. If None, loads from environment.
            store: Key-value store to use instead of the configured backend.
            id_factory: Id / clock source shared by all stores.
        """
        self.config = config or get_config()
        self.kv = store if store is not None else create_store(self.config)
        self.ids = id_factory or IdFactory()

        self.session = SessionStore(self.kv, self.config.session, self.ids)
        self.classifications = ClassificationStore(self.kv, self.ids)
        self.marketplace = MarketplaceStore(self.kv, self.ids)
        self.calculator = CalculatorStore(self.kv)

    def require_user(self) -> Identity:
        if self.session.current is None:
            raise NotAuthenticated("Log in first.")
        return self.session.current

    def classify(self, object_name: str, category: str, hazardous_elements: Sequence[str],
                 confidence: float, image_url: str = "") -> ClassificationRecord:
        """Record a classification result for the current identity."""
        user = self.require_user()
        return self.classifications.add(NewClassification(
            user_id=user.id,
            object_name=object_name,
            category=category,
            hazardous_elements=hazardous_elements,
            confidence=confidence,
            image_url=image_url,
        ))

    def post_listing(self, title: str, price: float, condition: str, category: str,
                     images: Sequence[str], description: str = "") -> MarketplaceListing:
        """Post a listing as the current identity (seller name is a snapshot)."""
        user = self.require_user()
        return self.marketplace.add(NewListing(
            seller_id=user.id,
            seller_name=user.name,
            title=title,
            price=price,
            condition=condition,
            category=category,
            images=images,
            description=description,
        ))

    def remove_listing(self, listing_id: str) -> bool:
        return self.marketplace.remove(listing_id, actor=self.require_user())

    def close(self) -> None:
        self.kv.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False  # Don't suppress exceptions
