# patrol_report/composer.py
"""
Turns a completed report into the shareable message.

alerts -> payload -> text generator -> (on success) remember the report time.
"""
from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from patrol_report.alerts import derive_alerts
from patrol_report.errors import GenerationError, MissingCredentialError
from patrol_report.llm_generation import ReportGenerator
from patrol_report.reminder import ReminderStore, now_ms, record_report_generated
from patrol_report.report_data import ReportData

GENERATION_FAILED_MESSAGE = "Failed to generate report. Please check API key."
MISSING_KEY_MESSAGE = "API Key not found. Configure GEMINI_API_KEY (or OPENAI_API_KEY) and try again."


@dataclass
class GenerationOutcome:
    ok: bool
    text: str = ""
    error: Optional[str] = None


def build_payload(data: ReportData) -> Dict[str, Any]:
    """Wire payload with freshly derived alerts. `data` itself is not modified."""
    merged = data.model_copy(deep=True)
    merged.system_alerts = derive_alerts(data)
    return merged.to_payload()


class ReportComposer:
    def __init__(self, generator: ReportGenerator,
                 store: Optional[ReminderStore] = None,
                 clock: Callable[[], int] = now_ms):
        self.generator = generator
        self.store = store
        self.clock = clock

    async def generate(self, data: ReportData) -> GenerationOutcome:
        payload = build_payload(data)
        print(f"[Composer] Generating report with {len(payload['systemAlerts'])} alert(s)")

        try:
            text = await self.generator.compose(payload)
        except MissingCredentialError as e:
            print(f"[Composer] {e}", file=sys.stderr)
            return GenerationOutcome(ok=False, error=MISSING_KEY_MESSAGE)
        except GenerationError as e:
            print(f"[Composer] Generation failed: {e}", file=sys.stderr)
            return GenerationOutcome(ok=False, error=GENERATION_FAILED_MESSAGE)
        except Exception as e:
            print(f"[Composer] Report generator error ({type(e).__name__}): {e}", file=sys.stderr)
            return GenerationOutcome(ok=False, error=GENERATION_FAILED_MESSAGE)

        if not text or not text.strip():
            print("[Composer] Generator returned no text", file=sys.stderr)
            return GenerationOutcome(ok=False, error=GENERATION_FAILED_MESSAGE)

        if self.store is not None:
            record_report_generated(self.store, self.clock())
        return GenerationOutcome(ok=True, text=text)
