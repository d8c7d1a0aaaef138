# ==============================================
# Carbon Calculator
# ==============================================
#
# PURPOSE:
#   Yearly carbon footprint estimate from a handful of transport,
#   home-energy and lifestyle inputs, plus the per-user persistence
#   of the calculator form.
#
# FACTORS (kg CO₂ per unit):
# --------------------------
#   transport : car mile 0.404, public transport mile 0.089, flight mile 0.255
#   home      : electricity kWh 0.92, gas unit 2.04 (heating is recorded only)
#   lifestyle : diet multiplier × 365 days
#                 vegan 1.5, vegetarian 2.5, mixed 3.3, meat 4.2
#               shopping 0.5, waste 0.3
#
# PERSISTED KEY:
# --------------
#   carbon_calculator_<user id> →
#     {"transportData": {"carMiles", "publicTransport", "flights"},
#      "homeData":      {"electricity", "gas", "heating"},
#      "lifestyleData": {"diet", "shopping", "waste"},
#      "results":       {"total", "breakdown": {...}} | null}
#
#   Blank numeric inputs are stored as "" and count as zero.
#
# ==============================================

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from ewaste.errors import ValidationError
from ewaste.persistence import KeyValueStore

TRANSPORT_FACTORS = {"car_miles": 0.404, "public_transport": 0.089, "flights": 0.255}
HOME_FACTORS = {"electricity": 0.92, "gas": 2.04}
LIFESTYLE_FACTORS = {"shopping": 0.5, "waste": 0.3}
DIET_MULTIPLIERS = {"vegan": 1.5, "vegetarian": 2.5, "mixed": 3.3, "meat": 4.2}

# Wire key → (section, attribute)
_WIRE_FIELDS = {
    "carMiles": ("transportData", "car_miles"),
    "publicTransport": ("transportData", "public_transport"),
    "flights": ("transportData", "flights"),
    "electricity": ("homeData", "electricity"),
    "gas": ("homeData", "gas"),
    "heating": ("homeData", "heating"),
    "diet": ("lifestyleData", "diet"),
    "shopping": ("lifestyleData", "shopping"),
    "waste": ("lifestyleData", "waste"),
}


def parse_amount(value: Any, name: str) -> Optional[float]:
    """'' / None → None, numbers and numeric strings → float."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    return amount


@dataclass
class CarbonInputs:
    car_miles: Optional[float] = None
    public_transport: Optional[float] = None
    flights: Optional[float] = None
    electricity: Optional[float] = None
    gas: Optional[float] = None
    heating: Optional[float] = None
    diet: str = "mixed"
    shopping: Optional[float] = None
    waste: Optional[float] = None

    def __post_init__(self):
        if self.diet not in DIET_MULTIPLIERS:
            raise ValidationError(
                f"diet must be one of {', '.join(DIET_MULTIPLIERS)}, got {self.diet!r}"
            )
        for f in fields(self):
            if f.name != "diet":
                setattr(self, f.name, parse_amount(getattr(self, f.name), f.name))

    def amount(self, name: str) -> float:
        return getattr(self, name) or 0.0


@dataclass
class FootprintResult:
    """kg CO₂ per year, each figure rounded to one decimal."""
    total: float
    transport: float
    home: float
    lifestyle: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "breakdown": {
                "transport": self.transport,
                "home": self.home,
                "lifestyle": self.lifestyle,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FootprintResult":
        breakdown = data["breakdown"]
        return cls(
            total=float(data["total"]),
            transport=float(breakdown["transport"]),
            home=float(breakdown["home"]),
            lifestyle=float(breakdown["lifestyle"]),
        )


def compute_footprint(inputs: CarbonInputs) -> FootprintResult:
    transport = sum(inputs.amount(name) * factor for name, factor in TRANSPORT_FACTORS.items())
    home = sum(inputs.amount(name) * factor for name, factor in HOME_FACTORS.items())
    lifestyle = DIET_MULTIPLIERS[inputs.diet] * 365 + sum(
        inputs.amount(name) * factor for name, factor in LIFESTYLE_FACTORS.items()
    )
    return FootprintResult(
        total=round(transport + home + lifestyle, 1),
        transport=round(transport, 1),
        home=round(home, 1),
        lifestyle=round(lifestyle, 1),
    )


@dataclass
class CalculatorState:
    inputs: CarbonInputs = field(default_factory=CarbonInputs)
    result: Optional[FootprintResult] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"transportData": {}, "homeData": {}, "lifestyleData": {}}
        for wire_key, (section, attr) in _WIRE_FIELDS.items():
            value = getattr(self.inputs, attr)
            data[section][wire_key] = "" if value is None else value
        data["results"] = self.result.to_dict() if self.result else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalculatorState":
        values = {}
        for wire_key, (section, attr) in _WIRE_FIELDS.items():
            section_data = data.get(section) or {}
            if wire_key in section_data:
                values[attr] = section_data[wire_key]
        results = data.get("results")
        return cls(
            inputs=CarbonInputs(**values),
            result=FootprintResult.from_dict(results) if results else None,
        )


class CalculatorStore:
    """Per-user calculator form state."""

    KEY_PREFIX = "carbon_calculator_"

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def _key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}{user_id}"

    def load(self, user_id: str) -> CalculatorState:
        """Saved state for the user, or a blank form when none is usable."""
        data = self._kv.get(self._key(user_id))
        if not isinstance(data, dict):
            return CalculatorState()
        try:
            return CalculatorState.from_dict(data)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            print(f"⚠ Ignoring corrupt calculator state for user {user_id}: {e}")
            return CalculatorState()

    def save(self, user_id: str, state: CalculatorState) -> None:
        self._kv.set(self._key(user_id), state.to_dict())

    def update(self, user_id: str, **changes: Any) -> CalculatorState:
        """Change some inputs, drop the stale result, and save."""
        state = self.load(user_id)
        values = {f.name: getattr(state.inputs, f.name) for f in fields(CarbonInputs)}
        unknown = set(changes) - set(values)
        if unknown:
            raise ValidationError(f"Unknown calculator fields: {', '.join(sorted(unknown))}")
        values.update(changes)
        state = CalculatorState(inputs=CarbonInputs(**values), result=None)
        self.save(user_id, state)
        return state

    def calculate(self, user_id: str) -> CalculatorState:
        state = self.load(user_id)
        state.result = compute_footprint(state.inputs)
        self.save(user_id, state)
        return state

    def reset(self, user_id: str) -> CalculatorState:
        state = CalculatorState()
        self.save(user_id, state)
        return state
