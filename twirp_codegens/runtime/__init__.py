"""Runtime support imported by generated Twirp middleware."""

from .analytics import EventSink, SubmissionError, Track
from .context import Context
from .logs import LoggerSink, LogSink, report_error

__all__ = [
    "Context",
    "EventSink",
    "LogSink",
    "LoggerSink",
    "SubmissionError",
    "Track",
    "report_error",
]
