# patrol_report/validation.py
"""
Per-step completeness rules for the report wizard.

Each step owns a list of rules. A rule either names fields that become
required when a predicate holds, or carries its own check. A step is
complete when every one of its rules passes. Failing a step only disables
the Next action; nothing here raises.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from patrol_report.report_data import ReportData

TOTAL_STEPS = 6

STEP_TITLES = {
    1: "Patrol Guard",
    2: "Fire Engines & Pumps",
    3: "Storage & Leakage",
    4: "Power",
    5: "Logistics",
    6: "Security",
}

Predicate = Callable[[ReportData], bool]


@dataclass(frozen=True)
class Rule:
    label: str
    check: Predicate

    def passes(self, data: ReportData) -> bool:
        return bool(self.check(data))


def required(label: str, *fields: str, when: Optional[Predicate] = None) -> Rule:
    """Rule: every named field is non-empty (only enforced while `when` holds)"""

    def check(data: ReportData) -> bool:
        if when is not None and not when(data):
            return True
        return all(getattr(data, f) for f in fields)

    return Rule(label, check)


def _generators_claimed(data: ReportData) -> bool:
    return not data.power_33kv_on and data.gas_gen_running


def _used_generators_have_times(data: ReportData) -> bool:
    if not _generators_claimed(data):
        return True
    return all(g.start_time and g.end_time for g in data.gas_generators if g.used)


STEP_RULES: Dict[int, List[Rule]] = {
    1: [
        required("Guard name", "guard_name"),
        required("Patrol start time", "patrol_start_time"),
        required("Patrol end time", "patrol_end_time"),
    ],
    2: [
        required("Hydrant pressure", "hydrant_pressure"),
        required("Jockey pump frequency", "jockey_pump_runtime"),
    ],
    3: [
        required("TK13 level", "tk13_level"),
        required("TK29 level", "tk29_level"),
        required("Air leak location", "air_line_leak_location",
                 when=lambda d: d.air_line_leak),
        required("Hydrant leak location", "hydrant_line_leak_location",
                 when=lambda d: d.hydrant_line_leak),
        required("Leaking product and location", "leaking_product", "product_line_leak_location",
                 when=lambda d: d.product_line_leak),
    ],
    4: [
        Rule("At least one gas generator used",
             lambda d: not _generators_claimed(d) or any(g.used for g in d.gas_generators)),
        Rule("Start and end time for every used generator", _used_generators_have_times),
    ],
    5: [
        required("Receipt product and tank", "product_name", "product_receipt_tank",
                 when=lambda d: d.product_receipt_active),
        required("Rake placement time and unloading status", "rake_placement_time", "rake_unloading_status",
                 when=lambda d: d.rake_placed),
        required("Rake removal time", "rake_removal_time",
                 when=lambda d: d.rake_placed and d.rake_unloading_status == "Completed" and d.rake_removed),
        Rule("Rake can only be removed after unloading is completed",
             lambda d: not d.rake_removed or d.rake_unloading_status == "Completed"),
    ],
    6: [
        required("CCTV down count and remarks", "cctv_down_count", "cctv_down_remarks",
                 when=lambda d: not d.all_cctv_running),
        required("C-BACS remarks", "cbacs_remarks", when=lambda d: not d.cbacs_running),
        required("Watch tower observation", "watch_tower_observation",
                 when=lambda d: d.watch_tower_used),
        required("Night vision observation", "night_vision_observation",
                 when=lambda d: d.night_vision_used),
    ],
}


def is_step_complete(data: ReportData, step: int) -> bool:
    rules = STEP_RULES.get(step)
    if rules is None:
        return False
    return all(rule.passes(data) for rule in rules)


def missing_requirements(data: ReportData, step: int) -> List[str]:
    """Labels of the rules that keep `step` from being complete"""
    rules = STEP_RULES.get(step)
    if rules is None:
        return ["Unknown step"]
    return [rule.label for rule in rules if not rule.passes(data)]
