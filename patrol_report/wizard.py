# patrol_report/wizard.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional
from patrol_report.alerts import is_jockey_running_frequently
from patrol_report.composer import GenerationOutcome, ReportComposer
from patrol_report.errors import GenerationInProgressError
from patrol_report.report_data import ReportData
from patrol_report.validation import TOTAL_STEPS, is_step_complete, missing_requirements

JOCKEY_CHECK_STEP = 3


class NavOutcome(Enum):
    ADVANCED = "advanced"
    CONFIRMATION_REQUIRED = "confirmation_required"
    GENERATE = "generate"


class WizardController:
    """
    Step navigation for one report session.

    Validation gating is left to the caller (see can_advance); the controller
    only adds the jockey pump interstitial when leaving the leakage step.
    """

    def __init__(self, composer: Optional[ReportComposer] = None,
                 data: Optional[ReportData] = None):
        self.composer = composer
        self.data = data if data is not None else ReportData()
        self.step = 1
        self.awaiting_jockey_confirmation = False
        self.is_generating = False

    @property
    def is_first(self) -> bool:
        return self.step == 1

    @property
    def is_last(self) -> bool:
        return self.step == TOTAL_STEPS

    def can_advance(self) -> bool:
        return is_step_complete(self.data, self.step)

    def missing(self) -> List[str]:
        return missing_requirements(self.data, self.step)

    def _needs_jockey_confirmation(self) -> bool:
        return (
            self.step == JOCKEY_CHECK_STEP
            and is_jockey_running_frequently(self.data)
            and not self.data.hydrant_line_leak
            and not self.data.jockey_warning_confirmed
        )

    def next(self) -> NavOutcome:
        if self._needs_jockey_confirmation():
            self.awaiting_jockey_confirmation = True
            return NavOutcome.CONFIRMATION_REQUIRED
        if self.step < TOTAL_STEPS:
            self.step += 1
            return NavOutcome.ADVANCED
        return NavOutcome.GENERATE

    def prev(self) -> None:
        if self.step > 1:
            self.step -= 1

    def confirm_jockey_warning(self) -> None:
        """Guard confirmed the hydrant line checks; record it and move on to Power"""
        if not self.awaiting_jockey_confirmation:
            return
        self.data.jockey_warning_confirmed = True
        self.awaiting_jockey_confirmation = False
        self.step = JOCKEY_CHECK_STEP + 1

    def decline_jockey_warning(self) -> None:
        self.awaiting_jockey_confirmation = False

    def jockey_warning_message(self) -> str:
        return (
            f"Jockey pump is running frequently (every {self.data.jockey_pump_runtime} mins). "
            "Please confirm whether hydrant line, sprinklers, flanges of monitors, "
            "and hydrant posts have been checked by you?"
        )

    async def generate(self) -> GenerationOutcome:
        if self.composer is None:
            raise RuntimeError("WizardController has no ReportComposer configured")
        if self.is_generating:
            raise GenerationInProgressError("A report is already being generated")
        self.is_generating = True
        try:
            return await self.composer.generate(self.data)
        finally:
            self.is_generating = False

    def reset(self) -> None:
        self.data = ReportData()
        self.step = 1
        self.awaiting_jockey_confirmation = False
