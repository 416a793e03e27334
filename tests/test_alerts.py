"""
Tests for safety alert derivation and ordering.
"""

import pytest

from patrol_report.alerts import (
    ARREST_LEAK_ALERT,
    CRITICAL_PRODUCT_LEAK_ALERT,
    GENERATOR_OVERRUN_ALERT,
    JOCKEY_PUMP_ALERT,
    UNRANKED_PRIORITY,
    WATER_SHORTAGE_ALERT,
    alert_priority,
    derive_alerts,
    generator_runtime_hours,
    parse_number,
)
from patrol_report.report_data import GasGeneratorInfo, ReportData


def _generator(start: str, end: str, used: bool = True) -> GasGeneratorInfo:
    return GasGeneratorInfo(id=1, name="Gas Gen 1", used=used, start_time=start, end_time=end)


def _power_off_with_run(start: str, end: str, gen_id: int = 1) -> ReportData:
    data = ReportData(power_33kv_on=False, gas_gen_running=True)
    data.update_gas_generator(gen_id, "used", True)
    data.update_gas_generator(gen_id, "start_time", start)
    data.update_gas_generator(gen_id, "end_time", end)
    return data


class TestParsing:

    @pytest.mark.parametrize("raw,expected", [
        ("14", 14.0),
        ("13.9", 13.9),
        (" 7.5 ", 7.5),
        ("12m", 12.0),
        (" 12 m", 12.0),
        ("12 meters", 12.0),
        ("-3.5bar", -3.5),
        ("", None),
        ("abc", None),
        (None, None),
    ])
    def test_parse_number(self, raw, expected) -> None:
        assert parse_number(raw) == expected

    def test_runtime_simple(self) -> None:
        assert generator_runtime_hours(_generator("20:00", "23:30")) == pytest.approx(3.5)

    def test_runtime_crosses_midnight(self) -> None:
        assert generator_runtime_hours(_generator("23:00", "01:00")) == pytest.approx(2.0)

    @pytest.mark.parametrize("gen", [
        _generator("20:00", "23:30", used=False),
        _generator("", "23:30"),
        _generator("20:00", ""),
        _generator("8pm", "23:30"),
    ])
    def test_runtime_skipped(self, gen) -> None:
        assert generator_runtime_hours(gen) is None


class TestWaterAlert:

    def test_exactly_fourteen_does_not_fire(self) -> None:
        assert derive_alerts(ReportData(tk13_level="14", tk29_level="20")) == []

    def test_just_below_fires(self) -> None:
        assert derive_alerts(ReportData(tk13_level="13.9", tk29_level="20")) == [WATER_SHORTAGE_ALERT]

    def test_either_tank_fires_once(self) -> None:
        assert derive_alerts(ReportData(tk13_level="10", tk29_level="9")) == [WATER_SHORTAGE_ALERT]

    @pytest.mark.parametrize("level", ["12m", " 12 m", "12 meters"])
    def test_level_with_unit_suffix_fires(self, level) -> None:
        assert derive_alerts(ReportData(tk13_level=level, tk29_level="20")) == [WATER_SHORTAGE_ALERT]

    @pytest.mark.parametrize("level", ["", "n/a", "low"])
    def test_unparseable_level_is_skipped(self, level) -> None:
        assert derive_alerts(ReportData(tk13_level=level, tk29_level=level)) == []


class TestGeneratorAlert:

    def test_exactly_three_hours_fires(self) -> None:
        assert derive_alerts(_power_off_with_run("20:00", "23:00")) == [GENERATOR_OVERRUN_ALERT]

    def test_under_three_hours_does_not_fire(self) -> None:
        assert derive_alerts(_power_off_with_run("20:00", "22:59")) == []

    def test_midnight_crossing_two_hours_does_not_fire(self) -> None:
        assert derive_alerts(_power_off_with_run("23:00", "01:00")) == []

    def test_midnight_crossing_long_run_fires(self) -> None:
        assert derive_alerts(_power_off_with_run("22:00", "02:00")) == [GENERATOR_OVERRUN_ALERT]

    def test_power_on_suppresses(self) -> None:
        data = _power_off_with_run("20:00", "23:30")
        data.power_33kv_on = True
        assert derive_alerts(data) == []

    def test_fires_once_for_several_generators(self) -> None:
        data = _power_off_with_run("18:00", "23:00", gen_id=1)
        for gen_id in (2, 3):
            data.update_gas_generator(gen_id, "used", True)
            data.update_gas_generator(gen_id, "start_time", "19:00")
            data.update_gas_generator(gen_id, "end_time", "23:00")
        assert derive_alerts(data) == [GENERATOR_OVERRUN_ALERT]

    def test_unused_generator_ignored(self) -> None:
        data = _power_off_with_run("18:00", "23:00")
        data.update_gas_generator(1, "used", False)
        assert derive_alerts(data) == []


class TestLeakAlerts:

    def test_product_leak_is_critical(self) -> None:
        data = ReportData(product_line_leak=True, leaking_product="HSD",
                          product_line_leak_location="Pump House 3")
        assert derive_alerts(data) == [CRITICAL_PRODUCT_LEAK_ALERT]

    def test_product_leak_suppresses_air_leak_message(self) -> None:
        data = ReportData(product_line_leak=True, leaking_product="HSD",
                          product_line_leak_location="Pump House 3",
                          air_line_leak=True, air_line_leak_location="Gantry")
        assert derive_alerts(data) == [CRITICAL_PRODUCT_LEAK_ALERT]

    @pytest.mark.parametrize("flags", [
        {"air_line_leak": True},
        {"hydrant_line_leak": True},
        {"air_line_leak": True, "hydrant_line_leak": True},
    ])
    def test_air_or_hydrant_leak_asks_to_arrest(self, flags) -> None:
        assert derive_alerts(ReportData(**flags)) == [ARREST_LEAK_ALERT]


class TestJockeyAlert:

    def test_needs_threshold_and_confirmation(self) -> None:
        data = ReportData(jockey_pump_runtime="30", jockey_warning_confirmed=True)
        assert derive_alerts(data) == [JOCKEY_PUMP_ALERT]

    def test_threshold_without_confirmation(self) -> None:
        assert derive_alerts(ReportData(jockey_pump_runtime="30")) == []

    def test_confirmation_without_threshold(self) -> None:
        data = ReportData(jockey_pump_runtime="45", jockey_warning_confirmed=True)
        assert derive_alerts(data) == []

    def test_unparseable_runtime(self) -> None:
        data = ReportData(jockey_pump_runtime="often", jockey_warning_confirmed=True)
        assert derive_alerts(data) == []


class TestOrdering:

    def test_water_and_generator_scenario(self) -> None:
        data = _power_off_with_run("20:00", "23:30")
        data.tk13_level = "12"
        data.tk29_level = "20"
        assert data.gas_gen_changeover is False
        assert derive_alerts(data) == [WATER_SHORTAGE_ALERT, GENERATOR_OVERRUN_ALERT]

    def test_full_priority_order(self) -> None:
        data = _power_off_with_run("20:00", "23:30")
        data.tk13_level = "10"
        data.hydrant_line_leak = True
        data.jockey_pump_runtime = "20"
        data.jockey_warning_confirmed = True
        assert derive_alerts(data) == [
            ARREST_LEAK_ALERT,
            WATER_SHORTAGE_ALERT,
            GENERATOR_OVERRUN_ALERT,
            JOCKEY_PUMP_ALERT,
        ]

    def test_critical_first_and_jockey_last(self) -> None:
        data = ReportData(tk13_level="5", product_line_leak=True,
                          jockey_pump_runtime="10", jockey_warning_confirmed=True)
        alerts = derive_alerts(data)
        assert alerts[0] == CRITICAL_PRODUCT_LEAK_ALERT
        assert alerts[-1] == JOCKEY_PUMP_ALERT
        assert len(alerts) == len(set(alerts))

    def test_idempotent(self) -> None:
        data = _power_off_with_run("20:00", "23:30")
        data.tk29_level = "3"
        data.air_line_leak = True
        assert derive_alerts(data) == derive_alerts(data)

    @pytest.mark.parametrize("alert,rank", [
        (CRITICAL_PRODUCT_LEAK_ALERT, 0),
        (ARREST_LEAK_ALERT, 1),
        (WATER_SHORTAGE_ALERT, 2),
        (GENERATOR_OVERRUN_ALERT, 2),
        (JOCKEY_PUMP_ALERT, 3),
        ("*Something else*", UNRANKED_PRIORITY),
    ])
    def test_alert_priority(self, alert, rank) -> None:
        assert alert_priority(alert) == rank
