"""Structured warning utilities."""

from .warnings import JsonlWarningLog, ScanWarning, WarningCollector, WarningSink, utc_timestamp

__all__ = ["JsonlWarningLog", "ScanWarning", "WarningCollector", "WarningSink", "utc_timestamp"]
