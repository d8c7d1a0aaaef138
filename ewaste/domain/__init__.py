# ==============================================
# DOMAIN (Data classes)
# ==============================================
#
# Modules:
# --------
# - identity.py  → Role, Identity, CredentialEntry
# - records.py   → ClassificationRecord, MarketplaceListing and the
#                  validated input shapes NewClassification / NewListing
#
# ==============================================

from .identity import Role, Identity, CredentialEntry
from .records import (
    Condition,
    NewClassification,
    ClassificationRecord,
    NewListing,
    MarketplaceListing,
    MAX_LISTING_IMAGES,
)

__all__ = [
    "Role",
    "Identity",
    "CredentialEntry",
    "Condition",
    "NewClassification",
    "ClassificationRecord",
    "NewListing",
    "MarketplaceListing",
    "MAX_LISTING_IMAGES"
]
