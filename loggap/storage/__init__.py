"""Run event logging"""

from .audit_log import AuditLog

__all__ = ["AuditLog"]
