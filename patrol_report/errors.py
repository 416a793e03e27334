# patrol_report/errors.py
"""Exceptions raised around report generation."""


class PatrolReportError(Exception):
    """Base class for patrol report errors"""


class MissingCredentialError(PatrolReportError):
    """No API key configured for the text-generation provider"""


class GenerationError(PatrolReportError):
    """The provider failed, rejected the request or returned no text"""


class GenerationInProgressError(PatrolReportError):
    """A report is already being generated for this session"""
