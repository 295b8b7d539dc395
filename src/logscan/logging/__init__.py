"""Structured logging utilities."""

from .audit import EVENT_KINDS, ScanEvent, ScanEventLog, make_event, utc_timestamp

__all__ = ["EVENT_KINDS", "ScanEvent", "ScanEventLog", "make_event", "utc_timestamp"]
