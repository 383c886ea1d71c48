"""Structured log sinks for generated middleware."""

import logging
from typing import Any, Protocol

from .context import Context

log = logging.getLogger(__name__)


class LogSink(Protocol):
    """Receives a record for every failed call.

    Logging middleware never changes the outcome of the call it observes:
    an exception raised by ``record`` is passed to report_error and the
    delegate error is re-raised.
    """

    def record(self, ctx: Context, error: BaseException, payload: dict[str, Any]) -> None: ...


class LoggerSink:
    """LogSink writing to a stdlib logger.

    Context fields and the payload are attached to the record as ``extra``
    under ``fields`` and ``payload``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or log

    def record(self, ctx: Context, error: BaseException, payload: dict[str, Any]) -> None:
        self.logger.error(
            "%s: %s",
            type(error).__name__,
            error,
            extra={"fields": dict(ctx.fields), "payload": payload},
        )


def report_error(ctx: Context, error: BaseException) -> None:
    """Log a failure raised by middleware itself, such as a failed submit."""
    log.error(
        "%s: %s",
        type(error).__name__,
        error,
        extra={"fields": dict(ctx.fields)},
    )
