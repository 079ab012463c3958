"""
Audit Logger

DESIGN DECISION: Every recovered failure in the pipeline is logged.
The localization core never raises to the UI, so without this log a
fallback rate or an untranslated message would be invisible.

The audit logger:
- Is synchronous (all callers are either pure functions or already
  awaiting a slower translation call)
- Never raises (a broken log handler must not break money display)
"""

from typing import Optional

import structlog

from money_l10n.models.events import LocalizationEvent, LocalizationSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: Optional[str] = None):
    """Module-level structured logger."""
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central event logging service.

    Components take an optional AuditLogger; when none is given they
    share the module default returned by get_audit_logger().
    """

    def __init__(self, name: str = "money_l10n.audit"):
        self._logger = structlog.get_logger(name)

    def log(self, event: LocalizationEvent) -> bool:
        """
        Log an event.

        Returns False if the log call itself failed.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == LocalizationSeverity.ERROR:
                self._logger.error("localization_event", **log_dict)
            elif event.severity == LocalizationSeverity.WARNING:
                self._logger.warning("localization_event", **log_dict)
            elif event.severity == LocalizationSeverity.DEBUG:
                self._logger.debug("localization_event", **log_dict)
            else:
                self._logger.info("localization_event", **log_dict)
        except Exception:
            return False
        return True


_default_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Shared AuditLogger for components built without one."""
    global _default_audit_logger
    if _default_audit_logger is None:
        _default_audit_logger = AuditLogger()
    return _default_audit_logger
