# patrol_report/alerts.py
"""
Safety alerts derived from a filled-in report.

The alert strings go to the report generator as-is and are printed at the
top of the message in the order returned here, so both the wording and the
ordering are part of the output.
"""
from __future__ import annotations
import re
from datetime import datetime, timedelta
from typing import List, Optional
from patrol_report.report_data import GasGeneratorInfo, ReportData

WATER_LEVEL_MIN_M = 14.0
GENERATOR_MAX_HOURS = 3.0
JOCKEY_FREQUENT_MINUTES = 45.0

CRITICAL_PRODUCT_LEAK_ALERT = "*CRITICAL ALERT: PRODUCT LEAKAGE OBSERVED - IMMEDIATE ACTION REQUIRED.*"
ARREST_LEAK_ALERT = "*Please arrest the leakage observed.*"
WATER_SHORTAGE_ALERT = (
    "*ATTENTION: Water required is less than 8280 Kl (OISD-STD-117). "
    "Maintain water levels immediately.*"
)
GENERATOR_OVERRUN_ALERT = "*ATTENTION: Generator running > 3 hours. Changeover generator to avoid overheating.*"
JOCKEY_PUMP_ALERT = "*ALERT: Frequent running of jockey pump water leakage to be checked.*"

# Matched against the alert text; first hit wins, anything else ranks last.
PRIORITY_MARKERS = (
    ("CRITICAL ALERT", 0),
    ("Please arrest", 1),
    ("ATTENTION", 2),
    ("Frequent running of jockey pump", 3),
)
UNRANKED_PRIORITY = 4

_TIME_FORMATS = ("%H:%M", "%H:%M:%S")
_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Optional[str]) -> Optional[float]:
    """
    Leading decimal value of a form field ("12.5", "12m", " 12 m" -> 12.5/12/12),
    or None when it doesn't start with a number.
    """
    if value is None:
        return None
    match = _LEADING_NUMBER_RE.match(str(value))
    if not match:
        return None
    return float(match.group(0))


def _parse_time(value: str) -> Optional[datetime]:
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def generator_runtime_hours(gen: GasGeneratorInfo) -> Optional[float]:
    """
    Hours between a generator's start and end time of day.
    An end time earlier than the start means the run crossed midnight.
    Returns None when the generator was not used or a time is missing/invalid.
    """
    if not (gen.used and gen.start_time and gen.end_time):
        return None
    start = _parse_time(gen.start_time)
    end = _parse_time(gen.end_time)
    if start is None or end is None:
        return None
    elapsed = end - start
    if elapsed < timedelta(0):
        elapsed += timedelta(hours=24)
    return elapsed.total_seconds() / 3600


def is_jockey_running_frequently(data: ReportData) -> bool:
    minutes = parse_number(data.jockey_pump_runtime)
    return minutes is not None and minutes < JOCKEY_FREQUENT_MINUTES


def _below_water_minimum(level: str) -> bool:
    value = parse_number(level)
    return value is not None and value < WATER_LEVEL_MIN_M


def alert_priority(alert: str) -> int:
    for marker, rank in PRIORITY_MARKERS:
        if marker in alert:
            return rank
    return UNRANKED_PRIORITY


def derive_alerts(data: ReportData) -> List[str]:
    """Compute the de-duplicated, priority-ordered alert list for a report"""
    alerts: List[str] = []

    def add(alert: str) -> None:
        if alert not in alerts:
            alerts.append(alert)

    # 1. Water tank levels
    if _below_water_minimum(data.tk13_level) or _below_water_minimum(data.tk29_level):
        add(WATER_SHORTAGE_ALERT)

    # 2. Generator run time, only while 33KV is off
    long_running = any(
        hours is not None and hours >= GENERATOR_MAX_HOURS
        for hours in (generator_runtime_hours(g) for g in data.gas_generators)
    )
    if long_running and not data.power_33kv_on:
        add(GENERATOR_OVERRUN_ALERT)

    # 3. Leakage: a product leak replaces the generic air/hydrant message
    if data.product_line_leak:
        add(CRITICAL_PRODUCT_LEAK_ALERT)
    elif data.air_line_leak or data.hydrant_line_leak:
        add(ARREST_LEAK_ALERT)

    # 4. Jockey pump, only after the guard confirmed the line checks
    if is_jockey_running_frequently(data) and data.jockey_warning_confirmed:
        add(JOCKEY_PUMP_ALERT)

    return sorted(alerts, key=alert_priority)
