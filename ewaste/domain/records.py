# ==============================================
# Classification Records & Marketplace Listings
# ==============================================
#
# PURPOSE:
#   Data classes for the two record collections, plus the input
#   shapes the stores accept from callers.
#
# WHY THE INPUT SHAPES EXIST:
#   NewClassification and NewListing are the validation boundary.
#   A store never sees an out-of-range confidence, an empty
#   hazardous-elements list, a negative price or 0 / 6+ images:
#   the constructor raises ValidationError first.
#
# ENUMS:
# ------
# - Condition(Enum): EXCELLENT, GOOD, FAIR, PARTS
#
# CLASSES:
# --------
# - NewClassification   → record without id / created_at
# - ClassificationRecord (frozen) → stored, immutable record
# - NewListing          → listing without id / created_at / is_active
# - MarketplaceListing (frozen)   → stored listing
#
#   Wire format uses camelCase keys (userId, objectName, createdAt…)
#   and ISO-8601 timestamps.
#
# ==============================================

import math
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Sequence, Tuple

from ewaste.errors import ValidationError

MAX_LISTING_IMAGES = 5


class Condition(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    PARTS = "parts"


# --- field checks shared by both record types ---

def _text(value: Any, name: str, allow_blank: bool = False) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {value!r}")
    if not allow_blank and not value.strip():
        raise ValidationError(f"{name} must not be blank")
    return value


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    return value


def _strings(values: Any, name: str) -> Tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValidationError(f"{name} must be a list of strings, got {values!r}")
    return tuple(_text(v, f"{name} entry") for v in values)


def _condition(value: Any) -> Condition:
    if isinstance(value, Condition):
        return value
    try:
        return Condition(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Condition)
        raise ValidationError(f"condition must be one of {allowed}, got {value!r}")


def _timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"createdAt is not an ISO timestamp: {value!r}")
    else:
        raise ValidationError(f"createdAt must be a timestamp, got {value!r}")
    # Naive timestamps are taken as UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require(data: Any, *keys: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"expected an object, got {type(data).__name__}")
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValidationError(f"missing fields: {', '.join(missing)}")


# ==============================================
# Classification
# ==============================================

@dataclass
class NewClassification:
    """A classification result waiting to be stored."""
    user_id: str
    object_name: str
    category: str
    hazardous_elements: Sequence[str]
    confidence: float
    image_url: str = ""

    def __post_init__(self):
        _text(self.user_id, "userId")
        _text(self.object_name, "objectName")
        _text(self.category, "category")
        _text(self.image_url, "imageUrl", allow_blank=True)
        self.hazardous_elements = _strings(self.hazardous_elements, "hazardousElements")
        if not self.hazardous_elements:
            raise ValidationError("hazardousElements must not be empty")
        _number(self.confidence, "confidence")
        if not 0 <= self.confidence <= 100:
            raise ValidationError(f"confidence must be within [0, 100], got {self.confidence}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewClassification":
        _require(data, "userId", "objectName", "category", "hazardousElements", "confidence")
        return cls(
            user_id=data["userId"],
            object_name=data["objectName"],
            category=data["category"],
            hazardous_elements=data["hazardousElements"],
            confidence=data["confidence"],
            image_url=data.get("imageUrl", ""),
        )


@dataclass(frozen=True)
class ClassificationRecord:
    """A stored result describing one piece of e-waste."""
    id: str
    user_id: str
    image_url: str
    object_name: str
    category: str
    hazardous_elements: Tuple[str, ...]
    confidence: float
    created_at: datetime

    @classmethod
    def create(cls, new: NewClassification, record_id: str, created_at: datetime) -> "ClassificationRecord":
        return cls(
            id=record_id,
            user_id=new.user_id,
            image_url=new.image_url,
            object_name=new.object_name,
            category=new.category,
            hazardous_elements=tuple(new.hazardous_elements),
            confidence=new.confidence,
            created_at=created_at,
        )

    @property
    def is_hazardous(self) -> bool:
        return len(self.hazardous_elements) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "imageUrl": self.image_url,
            "objectName": self.object_name,
            "category": self.category,
            "hazardousElements": list(self.hazardous_elements),
            "confidence": self.confidence,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassificationRecord":
        _require(data, "id", "createdAt")
        return cls.create(
            NewClassification.from_dict(data),
            record_id=_text(data["id"], "id"),
            created_at=_timestamp(data["createdAt"]),
        )


# ==============================================
# Marketplace
# ==============================================

@dataclass
class NewListing:
    """A for-sale item waiting to be posted."""
    seller_id: str
    seller_name: str
    title: str
    price: float
    condition: Condition
    category: str
    images: Sequence[str]
    description: str = ""

    def __post_init__(self):
        _text(self.seller_id, "sellerId")
        _text(self.seller_name, "sellerName")
        _text(self.title, "title")
        _text(self.category, "category")
        _text(self.description, "description", allow_blank=True)
        _number(self.price, "price")
        if self.price < 0 or math.isinf(self.price):
            raise ValidationError(f"price must be a finite number >= 0, got {self.price}")
        self.condition = _condition(self.condition)
        self.images = _strings(self.images, "images")
        if not 1 <= len(self.images) <= MAX_LISTING_IMAGES:
            raise ValidationError(
                f"a listing needs 1 to {MAX_LISTING_IMAGES} images, got {len(self.images)}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NewListing":
        _require(data, "sellerId", "sellerName", "title", "price", "condition", "category", "images")
        return cls(
            seller_id=data["sellerId"],
            seller_name=data["sellerName"],
            title=data["title"],
            price=data["price"],
            condition=data["condition"],
            category=data["category"],
            images=data["images"],
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class MarketplaceListing:
    """A stored for-sale item posted by a seller."""
    id: str
    seller_id: str
    seller_name: str  # snapshot taken when the listing was posted
    title: str
    description: str
    price: float
    condition: Condition
    category: str
    images: Tuple[str, ...]
    created_at: datetime
    is_active: bool = field(default=True)

    @classmethod
    def create(cls, new: NewListing, listing_id: str, created_at: datetime,
               is_active: bool = True) -> "MarketplaceListing":
        return cls(
            id=listing_id,
            seller_id=new.seller_id,
            seller_name=new.seller_name,
            title=new.title,
            description=new.description,
            price=new.price,
            condition=new.condition,
            category=new.category,
            images=tuple(new.images),
            created_at=created_at,
            is_active=is_active,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sellerId": self.seller_id,
            "sellerName": self.seller_name,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "condition": self.condition.value,
            "category": self.category,
            "images": list(self.images),
            "createdAt": self.created_at.isoformat(),
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketplaceListing":
        _require(data, "id", "createdAt")
        is_active = data.get("isActive", True)
        if not isinstance(is_active, bool):
            raise ValidationError(f"isActive must be a boolean, got {is_active!r}")
        return cls.create(
            NewListing.from_dict(data),
            listing_id=_text(data["id"], "id"),
            created_at=_timestamp(data["createdAt"]),
            is_active=is_active,
        )
