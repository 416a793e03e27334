# patrol_report/export.py
"""Sharing and export of the generated report"""

import json
import sys
from pathlib import Path
from typing import Any, Dict
from urllib.parse import quote

import pyperclip

WHATSAPP_SHARE_URL = "https://wa.me/?text="


def whatsapp_share_url(text: str) -> str:
    """wa.me link with the report text as the prefilled message"""
    return WHATSAPP_SHARE_URL + quote(text, safe="!~*'()")


def copy_to_clipboard(text: str) -> bool:
    """Copy the report to the system clipboard. Returns False if no clipboard is available."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        print(f"Clipboard unavailable: {e}", file=sys.stderr)
        return False
    return True


def export_report_text(text: str, output_path: str) -> None:
    Path(output_path).write_text(text, encoding='utf-8')


def export_payload_json(payload: Dict[str, Any], output_path: str) -> None:
    """Export the generator payload (report data + alerts) to JSON"""
    Path(output_path).write_text(
        json.dumps(payload, indent=2, ensure_ascii=False),
        encoding='utf-8'
    )
