# ==============================================
# Tests for Carbon Calculator
# ==============================================

import pytest

from ewaste.calculator import (
    CarbonInputs,
    CalculatorState,
    CalculatorStore,
    compute_footprint,
)
from ewaste.errors import ValidationError


class TestComputeFootprint:
    def test_defaults_count_only_diet(self):
        result = compute_footprint(CarbonInputs())
        assert result.transport == 0
        assert result.home == 0
        assert result.lifestyle == pytest.approx(1204.5)
        assert result.total == pytest.approx(1204.5)

    def test_all_inputs(self):
        inputs = CarbonInputs(car_miles=1000, public_transport=100, flights=2000,
                              electricity=300, gas=50, heating=999,
                              diet="vegan", shopping=200, waste=100)
        result = compute_footprint(inputs)
        assert result.transport == pytest.approx(404 + 8.9 + 510)
        assert result.home == pytest.approx(276 + 102)
        assert result.lifestyle == pytest.approx(547.5 + 100 + 30)
        assert result.total == pytest.approx(round(922.9 + 378 + 677.5, 1))

    def test_blank_strings_are_zero(self):
        inputs = CarbonInputs(car_miles="", gas="  ", electricity="10")
        assert inputs.car_miles is None
        assert compute_footprint(inputs).home == pytest.approx(9.2)

    def test_unknown_diet_rejected(self):
        with pytest.raises(ValidationError):
            CarbonInputs(diet="carnivore")

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            CarbonInputs(flights="lots")


class TestCalculatorState:
    def test_wire_format(self):
        state = CalculatorState(inputs=CarbonInputs(car_miles=10, diet="meat"))
        data = state.to_dict()
        assert data["transportData"] == {"carMiles": 10.0, "publicTransport": "", "flights": ""}
        assert data["lifestyleData"]["diet"] == "meat"
        assert data["results"] is None

    def test_reads_form_strings(self):
        state = CalculatorState.from_dict({
            "transportData": {"carMiles": "120", "publicTransport": "", "flights": ""},
            "homeData": {"electricity": "", "gas": "", "heating": ""},
            "lifestyleData": {"diet": "vegetarian", "shopping": "", "waste": ""},
            "results": {"total": "1000.0", "breakdown": {"transport": "48.5", "home": "0.0",
                                                          "lifestyle": "951.5"}},
        })
        assert state.inputs.car_miles == 120
        assert state.inputs.diet == "vegetarian"
        assert state.result.transport == pytest.approx(48.5)


class TestCalculatorStore:
    def test_blank_form_for_new_user(self, kv):
        state = CalculatorStore(kv).load("42")
        assert state.inputs == CarbonInputs()
        assert state.result is None

    def test_update_and_calculate_persist_per_user(self, kv):
        store = CalculatorStore(kv)
        store.update("42", car_miles="100")
        state = store.calculate("42")
        assert state.result.transport == pytest.approx(40.4)

        reloaded = CalculatorStore(kv).load("42")
        assert reloaded.inputs.car_miles == 100
        assert reloaded.result == state.result
        assert CalculatorStore(kv).load("43").inputs.car_miles is None

    def test_update_clears_stale_result(self, kv):
        store = CalculatorStore(kv)
        store.calculate("42")
        assert store.update("42", gas=5).result is None

    def test_update_unknown_field_rejected(self, kv):
        with pytest.raises(ValidationError):
            CalculatorStore(kv).update("42", rocket_launches=3)

    def test_reset(self, kv):
        store = CalculatorStore(kv)
        store.update("42", diet="meat")
        assert store.reset("42").inputs.diet == "mixed"
        assert store.load("42").inputs.diet == "mixed"

    def test_corrupt_state_ignored(self, kv):
        kv.set("carbon_calculator_42", {"lifestyleData": {"diet": "carnivore"}})
        assert CalculatorStore(kv).load("42") == CalculatorState()
