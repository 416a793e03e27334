"""
Tests for the report data model.
"""

import pytest
from pydantic import ValidationError

from patrol_report.report_data import (
    EngineStatus,
    GasGeneratorInfo,
    ReportData,
    to_wire_name,
)


class TestDefaults:

    def test_fixed_cardinality(self, data) -> None:
        assert [e.name for e in data.engines] == [f"Engine {i}" for i in range(1, 6)]
        assert [g.name for g in data.gas_generators] == ["Gas Gen 1", "Gas Gen 2", "Gas Gen 3"]
        assert all(e.is_up for e in data.engines)
        assert not any(g.used for g in data.gas_generators)

    def test_security_defaults(self, data) -> None:
        assert data.all_cctv_running and data.cctv_down_count == "0"
        assert data.watch_tower_observation == "Normal"
        assert data.night_vision_observation == "Nothing suspicious"
        assert data.power_33kv_on
        assert data.system_alerts == []

    def test_sessions_do_not_share_lists(self) -> None:
        first, second = ReportData(), ReportData()
        first.update_engine(1, False)
        assert second.engines[0].is_up


class TestCardinality:

    def test_rejects_wrong_engine_count(self) -> None:
        with pytest.raises(ValidationError):
            ReportData(engines=[EngineStatus(id=1, name="Engine 1")])

    def test_rejects_wrong_generator_count_on_assignment(self, data) -> None:
        with pytest.raises(ValidationError):
            data.gas_generators = [GasGeneratorInfo(id=1, name="Gas Gen 1")]


class TestUpdates:

    def test_update_engine(self, data) -> None:
        data.update_engine(3, False)
        assert [e.is_up for e in data.engines] == [True, True, False, True, True]

    def test_update_gas_generator(self, data) -> None:
        data.update_gas_generator(2, "used", True)
        data.update_gas_generator(2, "start_time", "21:15")
        assert data.gas_generators[1].used
        assert data.gas_generators[1].start_time == "21:15"

    def test_update_gas_generator_unknown_field(self, data) -> None:
        with pytest.raises(ValueError):
            data.update_gas_generator(1, "name", "Spare")

    def test_rejects_unknown_product(self, data) -> None:
        with pytest.raises(ValidationError):
            data.leaking_product = "Kerosene"

    def test_rake_removed_requires_completed(self, data) -> None:
        data.set_rake_unloading_status("Ongoing")
        assert data.set_rake_removed(True) is False
        assert data.rake_removed is False

        data.set_rake_unloading_status("Completed")
        assert data.set_rake_removed(True) is True
        assert data.rake_removed is True

    def test_leaving_completed_clears_removed(self, data) -> None:
        data.set_rake_unloading_status("Completed")
        data.set_rake_removed(True)
        data.set_rake_unloading_status("Ongoing")
        assert data.rake_removed is False


class TestWireFormat:

    @pytest.mark.parametrize("name,wire", [
        ("guard_name", "guardName"),
        ("tk13_level", "tk13Level"),
        ("power_33kv_on", "power33kvOn"),
        ("is_up", "isUp"),
        ("all_cctv_running", "allCctvRunning"),
        ("id", "id"),
    ])
    def test_to_wire_name(self, name, wire) -> None:
        assert to_wire_name(name) == wire

    def test_loads_wire_json(self) -> None:
        data = ReportData.model_validate({
            "guardName": "A. Kumar",
            "tk13Level": "12",
            "gasGenerators": [
                {"id": 1, "name": "Gas Gen 1", "used": True, "startTime": "20:00", "endTime": "23:30"},
                {"id": 2, "name": "Gas Gen 2", "used": False, "startTime": "", "endTime": ""},
                {"id": 3, "name": "Gas Gen 3", "used": False, "startTime": "", "endTime": ""},
            ],
        })
        assert data.guard_name == "A. Kumar"
        assert data.gas_generators[0].end_time == "23:30"

    def test_payload_round_trips(self, complete_data) -> None:
        assert ReportData.model_validate(complete_data.to_payload()) == complete_data
