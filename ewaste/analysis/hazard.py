from enum import Enum
from typing import Iterable

CRITICAL_ELEMENTS = frozenset({"Mercury", "Lead", "Cadmium"})
HIGH_ELEMENTS = frozenset({"Chromium", "Brominated Flame Retardants"})


class HazardLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def hazard_level(elements: Iterable[str]) -> HazardLevel:
    """
    Grade a list of hazardous elements.

    critical → any of Mercury, Lead, Cadmium
    high     → any of Chromium, Brominated Flame Retardants
    medium   → more than two elements
    low      → anything else
    """
    elements = list(elements)
    if any(e in CRITICAL_ELEMENTS for e in elements):
        return HazardLevel.CRITICAL
    if any(e in HIGH_ELEMENTS for e in elements):
        return HazardLevel.HIGH
    if len(elements) > 2:
        return HazardLevel.MEDIUM
    return HazardLevel.LOW
