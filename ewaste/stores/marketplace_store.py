# ==============================================
# MarketplaceStore
# ==============================================
#
# PURPOSE:
#   Owns the marketplace listings, newest first, and mirrors them to
#   the "marketplace_listings" key on every mutation.
#
# CONTRACT:
# ---------
#   - add(new) -> MarketplaceListing
#       Validate, assign id and timestamp, force is_active=True, prepend.
#   - remove(listing_id, actor) -> bool
#       Hard delete. False (and no change) when the id is unknown.
#       Raises PermissionDenied unless actor is the seller or an admin.
#   - get_by_user(user_id) -> list   (active or not)
#   - get_all() -> list              (active only)
#
#   Nothing clears is_active; every stored listing is active.
#   Seeded on first run only: a stored empty list stays empty.
#   A failed write raises and leaves the in-memory list unchanged.
#
# ==============================================

from typing import Any, Dict, List, Optional, Union

from ewaste.domain import Identity, NewListing, MarketplaceListing
from ewaste.errors import PermissionDenied
from ewaste.ids import IdFactory
from ewaste.persistence import KeyValueStore
from .collection import load_collection
from .seed import seed_listings


class MarketplaceStore:
    STORAGE_KEY = "marketplace_listings"

    def __init__(self, kv: KeyValueStore, id_factory: Optional[IdFactory] = None):
        self._kv = kv
        self._ids = id_factory or IdFactory()
        self._listings: List[MarketplaceListing] = load_collection(
            kv,
            self.STORAGE_KEY,
            parse=MarketplaceListing.from_dict,
            seed=seed_listings,
            label="marketplace listings",
            seed_when_empty=False,
        )
        self._ids.observe(item.id for item in self._listings)

    def add(self, new: Union[NewListing, Dict[str, Any]]) -> MarketplaceListing:
        """
        Post a new listing.

        Raises:
            ValidationError: if price, condition, images or text fields are invalid
        """
        if not isinstance(new, NewListing):
            new = NewListing.from_dict(new)

        listing = MarketplaceListing.create(
            new,
            listing_id=self._ids.next_id(),
            created_at=self._ids.now(),
            is_active=True,
        )
        listings = [listing] + self._listings
        self._persist(listings)
        self._listings = listings
        return listing

    def remove(self, listing_id: str, actor: Identity) -> bool:
        """
        Delete a listing.

        Args:
            listing_id: Id of the listing to delete
            actor: Identity performing the removal

        Returns:
            True if a listing was removed, False if the id is unknown

        Raises:
            PermissionDenied: if actor is neither the seller nor an admin
        """
        index = next((i for i, item in enumerate(self._listings) if item.id == listing_id), None)
        if index is None:
            return False

        listing = self._listings[index]
        if actor is None or not (actor.is_admin or actor.id == listing.seller_id):
            who = actor.id if actor is not None else "anonymous"
            raise PermissionDenied(f"User {who} may not remove listing {listing_id}")

        listings = self._listings[:index] + self._listings[index + 1:]
        self._persist(listings)
        self._listings = listings
        return True

    def get_by_user(self, user_id: str) -> List[MarketplaceListing]:
        return [item for item in self._listings if item.seller_id == user_id]

    def get_all(self) -> List[MarketplaceListing]:
        return [item for item in self._listings if item.is_active]

    def get(self, listing_id: str) -> Optional[MarketplaceListing]:
        return next((item for item in self._listings if item.id == listing_id), None)

    def __len__(self) -> int:
        return len(self._listings)

    def _persist(self, listings: List[MarketplaceListing]) -> None:
        self._kv.set(self.STORAGE_KEY, [item.to_dict() for item in listings])
