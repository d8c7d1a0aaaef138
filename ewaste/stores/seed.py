# ==============================================
# Seed data
# ==============================================
#
# Built-in entries present whenever a store finds no usable
# persisted state. Each call returns fresh objects.
#
#   - roster:          the administrator account
#   - classifications: three demonstration records owned by user "1"
#   - listings:        two demonstration listings
#
# ==============================================

from datetime import datetime, timezone
from typing import List

from ewaste.config import SessionConfig
from ewaste.domain import (
    Role,
    CredentialEntry,
    Condition,
    NewClassification,
    ClassificationRecord,
    NewListing,
    MarketplaceListing,
)

SEED_USER_ID = "1"


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def seed_roster(config: SessionConfig) -> List[CredentialEntry]:
    return [
        CredentialEntry(
            email=config.admin_email,
            password=config.admin_password,
            name=config.admin_name,
            role=Role.ADMIN,
            user_id=config.admin_id,
        )
    ]


def seed_classifications() -> List[ClassificationRecord]:
    return [
        ClassificationRecord.create(
            NewClassification(
                user_id=SEED_USER_ID,
                image_url="https://images.pexels.com/photos/442559/pexels-photo-442559.jpeg",
                object_name="Laptop Battery",
                category="Battery",
                hazardous_elements=["Lead", "Cadmium", "Mercury"],
                confidence=94.2,
            ),
            record_id="1",
            created_at=_day(2024, 1, 15),
        ),
        ClassificationRecord.create(
            NewClassification(
                user_id=SEED_USER_ID,
                image_url="https://images.pexels.com/photos/1181675/pexels-photo-1181675.jpeg",
                object_name="Smartphone",
                category="Mobile Device",
                hazardous_elements=["Lithium", "Cobalt"],
                confidence=87.5,
            ),
            record_id="2",
            created_at=_day(2024, 1, 14),
        ),
        ClassificationRecord.create(
            NewClassification(
                user_id=SEED_USER_ID,
                image_url="https://images.pexels.com/photos/2582937/pexels-photo-2582937.jpeg",
                object_name="Circuit Board",
                category="Electronic Component",
                hazardous_elements=["Lead", "Mercury", "Chromium"],
                confidence=91.8,
            ),
            record_id="3",
            created_at=_day(2024, 1, 13),
        ),
    ]


def seed_listings() -> List[MarketplaceListing]:
    return [
        MarketplaceListing.create(
            NewListing(
                seller_id="1",
                seller_name="John Doe",
                title="iPhone 12 Pro - Excellent Condition",
                description=(
                    "Barely used iPhone 12 Pro with original box, charger, and "
                    "screen protector. Battery health at 95%."
                ),
                price=650,
                condition=Condition.EXCELLENT,
                category="Smartphones",
                images=["https://images.pexels.com/photos/1181675/pexels-photo-1181675.jpeg?w=400&h=300&fit=crop"],
            ),
            listing_id="1",
            created_at=_day(2024, 1, 15),
        ),
        MarketplaceListing.create(
            NewListing(
                seller_id="2",
                seller_name="Jane Smith",
                title="Gaming Laptop - Parts Only",
                description=(
                    "ASUS ROG laptop with motherboard issues. Screen, keyboard, "
                    "and other components work perfectly."
                ),
                price=200,
                condition=Condition.PARTS,
                category="Laptops",
                images=["https://images.pexels.com/photos/442559/pexels-photo-442559.jpeg?w=400&h=300&fit=crop"],
            ),
            listing_id="2",
            created_at=_day(2024, 1, 14),
        ),
    ]
