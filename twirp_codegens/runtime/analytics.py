"""Analytics events and the sink capability they are submitted to."""

from dataclasses import dataclass, field
from typing import Any, Protocol


class SubmissionError(RuntimeError):
    """Raised by sinks when an event could not be submitted."""


@dataclass
class Track:
    """A usage event recorded for one call.

    Each call builds its own Track; instances are never shared.
    """

    event: str
    user_id: str
    properties: dict[str, Any] = field(default_factory=dict)


class EventSink(Protocol):
    """Receives analytics events.

    submit() raises on failure; generated middleware re-raises that failure
    to its caller.
    """

    def submit(self, track: Track) -> None: ...
