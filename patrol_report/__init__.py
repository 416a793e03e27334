"""
Safety patrol report: data collection, validation, alerts and report generation
"""

# Data model and rules
from .report_data import ReportData, EngineStatus, GasGeneratorInfo
from .validation import is_step_complete, missing_requirements, TOTAL_STEPS
from .alerts import derive_alerts

# Wizard flow and generation
from .wizard import WizardController, NavOutcome
from .composer import ReportComposer, GenerationOutcome, build_payload
from .llm_generation import LLMProvider, create_generator
from .reminder import ReminderStore, ReminderMonitor
from .export import whatsapp_share_url, copy_to_clipboard, export_report_text, export_payload_json

__all__ = [
    'ReportData',
    'EngineStatus',
    'GasGeneratorInfo',
    'is_step_complete',
    'missing_requirements',
    'TOTAL_STEPS',
    'derive_alerts',
    'WizardController',
    'NavOutcome',
    'ReportComposer',
    'GenerationOutcome',
    'build_payload',
    'LLMProvider',
    'create_generator',
    'ReminderStore',
    'ReminderMonitor',
    'whatsapp_share_url',
    'copy_to_clipboard',
    'export_report_text',
    'export_payload_json',
]

__version__ = "1.0.0"
