"""Audit logging package."""

from money_l10n.audit.logger import AuditLogger, get_audit_logger, get_logger

__all__ = ["AuditLogger", "get_audit_logger", "get_logger"]
