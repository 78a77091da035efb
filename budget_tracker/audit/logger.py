"""
Audit Logger

DESIGN DECISION: Every change to the budget is logged, including
refused changes. This provides:
1. Complete traceability of income/expense movements
2. Debugging capability for soft failures
3. A history the caller can inspect after the fact

The audit logger:
- Writes each event to structlog at a level matching its severity
- Keeps an in-memory, append-only trail (nothing is persisted)
"""

import logging
from typing import List, Optional

import structlog

from budget_tracker.config import LoggingSettings, get_settings
from budget_tracker.models.audit import AuditEvent, AuditSeverity


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Safe to call more than once; the last call wins, including for
    loggers that have already been used. Only the package logger level
    is touched; handlers on the root logger belong to the host application.
    """
    settings = settings or get_settings().logging

    logging.getLogger("budget_tracker").setLevel(settings.level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service for a budget.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail (for the caller to inspect)
    """

    def __init__(self, name: str = "budget_tracker.audit"):
        self._events: List[AuditEvent] = []
        self._logger = structlog.get_logger(name)

    @property
    def events(self) -> List[AuditEvent]:
        """Copy of the recorded trail, oldest first."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Record an audit event.

        Never raises for domain reasons; returns the event for chaining.
        """
        self._events.append(event)

        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return event
