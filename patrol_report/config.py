# patrol_report/config.py
"""
Runtime settings, read from the environment (and a local .env file).
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_STATE_FILE = Path.home() / ".patrol_report_state.json"
DEFAULT_REMINDER_INTERVAL = 60  # seconds


@dataclass
class Settings:
    provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    openai_model: str = DEFAULT_OPENAI_MODEL
    state_file: Path = DEFAULT_STATE_FILE
    reminder_interval: int = DEFAULT_REMINDER_INTERVAL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        GEMINI_API_KEY wins over the older API_KEY name.
        """
        interval = os.getenv("PATROL_REMINDER_INTERVAL")
        return cls(
            provider=os.getenv("PATROL_LLM_PROVIDER", "gemini").strip().lower(),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            gemini_model=os.getenv("PATROL_GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            openai_model=os.getenv("PATROL_OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            state_file=Path(os.getenv("PATROL_STATE_FILE", str(DEFAULT_STATE_FILE))).expanduser(),
            reminder_interval=int(interval) if interval else DEFAULT_REMINDER_INTERVAL,
        )
