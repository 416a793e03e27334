# patrol_report/llm_generation.py
"""
WhatsApp report text generation using Gemini or OpenAI.
The provider gets one instruction (template + JSON payload) and returns plain text.
"""
from __future__ import annotations
import json
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Protocol
from patrol_report.config import Settings
from patrol_report.errors import GenerationError, MissingCredentialError


class LLMProvider(Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class ReportGenerator(Protocol):
    async def compose(self, payload: Dict[str, Any]) -> str:
        ...


def format_report_date(day: date) -> str:
    """e.g. 'Saturday, 17 October 2026'"""
    return f"{day:%A}, {day.day} {day:%B %Y}"


def build_report_prompt(payload: Dict[str, Any], day: Optional[date] = None) -> str:
    """Full instruction for the provider: fixed template plus the report data"""
    date_str = format_report_date(day or date.today())
    data_str = json.dumps(payload, indent=2, ensure_ascii=False)

    return f"""You are a Facility Operations Manager. Generate a daily status report for WhatsApp based on the JSON data provided.

**CRITICAL INSTRUCTIONS:**
1. **NO Markdown Code Blocks**: Do not output ```json or ```. Output raw text only.
2. **NO EMOJIS**: Do not use any emojis in the output.
3. **STRICT BOLDING**: Follow the bolding pattern in the template exactly (Label bold, value plain).
4. **ALERTS PRINTING**: The 'systemAlerts' array in the data is already sorted by priority (CRITICAL > ALERT > ATTENTION). **Print these strings exactly as they are at the very top of the message.** Do not reorder or summarize them.

**TEMPLATE STRUCTURE TO FOLLOW:**

Safety Status Report - {date_str}
[PRINT ALL STRINGS FROM systemAlerts ARRAY HERE, EACH ON A NEW LINE]
[EMPTY LINE]
*   *Guard [Name]*: Patrol from [Start] to [End].
*   *Fire Engines*: [If all 'isUp' are true: "All OK" | Else: "Engine X: Down"]. [Remarks if any].
*   *Water Tanks*: TK13 Level: [Value] m, TK29 Level: [Value] m.
*   *Pumps & Lines*: Hydrant Pressure: [Value] kg/m², Jockey Pump Runtime: [Value] mins.
*   *Leakages*: [If none: "No Leakage Observed" | Else list specifics e.g., "Air Line Leak at [Loc]", "Product Leak (Type) at [Loc]"].
*   *Power*: 33KV: [ON/OFF].
    [IF 33KV OFF, LIST USED GENERATORS]:
    *   [Gen Name]: [Start] - [End]
    *   Changeover [done/not done].
    [ALWAYS INCLUDE PIPELINE & RAKE INFO HERE UNDER POWER OR IMMEDIATELY AFTER]:
    *   *Product receipt thru PipeLine:* [Going on/Stopped]. [If Going on: Tank [No] ([Product])].
    *   *Rake:* Placed: [Yes/No][If Yes: " (at [Time])"], Unloading: [Status], Removed: [Yes/No][If Yes: " ([Time])"].
*   *AC & Lighting:* [ON/OFF].
*   *CCTV:* [If allCctvRunning: "All 71 Running" | Else: "[Count] down ([Remarks])"].
*   *C-BACS:* [If cbacsRunning: "Running" | Else: "Faulty ([Remarks])"].
*   *Watch Tower:* [Observation].
*   *Night Vision:* [Observation].

**DATA INPUT:**
{data_str}
"""


def _require_text(text: Optional[str], provider: LLMProvider) -> str:
    if not text or not text.strip():
        raise GenerationError(f"{provider.value} returned an empty report")
    return text.strip()


class GeminiReportGenerator:
    """Generates report text with Google Gemini. Requires GEMINI_API_KEY."""

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.5-flash"):
        self.api_key = api_key
        self.model = model

    async def compose(self, payload: Dict[str, Any]) -> str:
        if not self.api_key:
            raise MissingCredentialError("GEMINI_API_KEY environment variable not set")

        try:
            import google.generativeai as genai
        except ImportError as e:
            raise GenerationError("Google Generative AI library not installed. Run: pip install google-generativeai") from e

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model)

        try:
            response = await model.generate_content_async(build_report_prompt(payload))
            text = response.text
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        return _require_text(text, LLMProvider.GEMINI)


class OpenAIReportGenerator:
    """Generates report text with OpenAI chat completions. Requires OPENAI_API_KEY."""

    def __init__(self, api_key: Optional[str], model: str = "gpt-4o"):
        self.api_key = api_key
        self.model = model

    async def compose(self, payload: Dict[str, Any]) -> str:
        if not self.api_key:
            raise MissingCredentialError("OPENAI_API_KEY environment variable not set")

        try:
            import openai
        except ImportError as e:
            raise GenerationError("OpenAI library not installed. Run: pip install openai") from e

        client = openai.AsyncOpenAI(api_key=self.api_key)

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_report_prompt(payload)}],
            )
            text = response.choices[0].message.content
        except (openai.OpenAIError, IndexError) as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e

        return _require_text(text, LLMProvider.OPENAI)


def create_generator(provider: LLMProvider, settings: Settings) -> ReportGenerator:
    if provider == LLMProvider.OPENAI:
        return OpenAIReportGenerator(settings.openai_api_key, settings.openai_model)
    return GeminiReportGenerator(settings.gemini_api_key, settings.gemini_model)
