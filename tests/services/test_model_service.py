"""Tests for ModelService: describe, enabled, fire."""

from pflow.domain.model import Model
from pflow.services.model import ModelService


class TestDescribe:
    def test_counter(self, counter_model: Model) -> None:
        result = ModelService(counter_model).describe()
        assert result.ok
        assert result.op == "describe"
        d = result.data
        assert d["schema"] == "counter"
        assert d["roles"] == ["default"]
        assert d["initial_state"] == [0, 1, 1]
        assert [p["label"] for p in d["places"]] == ["P0", "P1", "flag"]
        assert d["places"][0]["capacity"] is None
        dec0 = d["transitions"][0]
        assert dec0 == {
            "label": "dec0",
            "offset": 0,
            "role": "default",
            "delta": [-1, 0, 0],
            "guards": {"flag": 1},
        }

    def test_capacity_reported(self, buffer_model: Model) -> None:
        places = ModelService(buffer_model).describe().data["places"]
        assert places == [{"label": "Buf", "offset": 0, "initial": 0, "capacity": 3}]


class TestEnabled:
    def test_from_initial_state(self, counter_model: Model) -> None:
        result = ModelService(counter_model).enabled()
        assert result.ok
        actions = [item["action"] for item in result.data["items"]]
        assert actions == ["dec1", "inc0", "inc1", "clearFlag"]
        assert result.data["count"] == 4
        assert result.data["state"] == [0, 1, 1]

    def test_role_filter(self, octoe_model: Model) -> None:
        svc = ModelService(octoe_model)
        x_moves = svc.enabled(role="x").data["items"]
        assert len(x_moves) == 9
        assert svc.enabled(role="o").data["count"] == 0

    def test_unknown_role_warns(self, octoe_model: Model) -> None:
        result = ModelService(octoe_model).enabled(role="z")
        assert result.ok
        assert result.data["count"] == 0
        assert result.warnings == ["Unknown role 'z'"]

    def test_explicit_state(self, buffer_model: Model) -> None:
        items = ModelService(buffer_model).enabled([3]).data["items"]
        assert [i["action"] for i in items] == ["Consume"]
        assert items[0]["state"] == [2]

    def test_multiplier(self, buffer_model: Model) -> None:
        items = ModelService(buffer_model).enabled([2], multiplier=2).data["items"]
        assert [i["action"] for i in items] == ["Consume"]

    def test_wrong_length_state(self, counter_model: Model) -> None:
        result = ModelService(counter_model).enabled([1])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_STATE"
        assert result.error.detail["expected_length"] == 3


class TestFire:
    def test_sequence(self, counter_model: Model) -> None:
        result = ModelService(counter_model).fire(["inc0", "inc0", "clearFlag", "dec0"])
        assert result.ok
        assert result.data["initial_state"] == [0, 1, 1]
        assert result.data["state"] == [1, 1, 0]
        assert result.data["count"] == 4
        assert result.data["steps"][1] == {
            "step": 1,
            "action": "inc0",
            "role": "default",
            "state": [2, 1, 1],
        }

    def test_stops_on_first_error(self, counter_model: Model) -> None:
        result = ModelService(counter_model).fire(["inc0", "dec0", "inc1"])
        assert not result.ok
        assert result.op == "fire"
        assert result.error is not None
        assert result.error.code == "GUARD_CHECK_FAILURE"
        assert result.error.detail == {
            "step": 1,
            "action": "dec0",
            "state": [1, 1, 1],
            "attempted": [1, 1, 0],
        }

    def test_keep_going_skips_failures(self, buffer_model: Model) -> None:
        result = ModelService(buffer_model).fire(
            ["Consume", "Produce", "Produce"], stop_on_error=False
        )
        assert result.ok
        assert result.data["state"] == [2]
        assert [s["step"] for s in result.data["steps"]] == [1, 2]
        assert result.warnings == ["Step 0 (Consume): output cannot be negative"]

    def test_unknown_action(self, buffer_model: Model) -> None:
        result = ModelService(buffer_model).fire(["Nope"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ACTION"

    def test_multiplier_and_capacity(self, buffer_model: Model) -> None:
        svc = ModelService(buffer_model)
        assert svc.fire(["Produce"], multiplier=3).data["state"] == [3]
        failed = svc.fire(["Produce"], multiplier=4)
        assert failed.error is not None
        assert failed.error.code == "EXCEEDS_CAPACITY"
        assert failed.error.detail["attempted"] == [4]

    def test_caller_state_untouched(self, buffer_model: Model) -> None:
        state = [1]
        result = ModelService(buffer_model).fire(["Produce"], state)
        assert result.data["state"] == [2]
        assert state == [1]

    def test_empty_sequence(self, buffer_model: Model) -> None:
        result = ModelService(buffer_model).fire([])
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["state"] == [0]
