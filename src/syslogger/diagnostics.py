"""
Diagnostic logging for syslogger itself (sink failures, transport lifecycle).

Events are rendered by structlog and handed to a standard library logger under
the ``syslogger`` hierarchy, so applications decide where they go. Without any
configuration only warnings and above reach stderr.
"""

from __future__ import annotations

import logging

import structlog

DIAGNOSTICS_ROOT = "syslogger"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for library diagnostics."""
    return structlog.wrap_logger(
        logging.getLogger(name or DIAGNOSTICS_ROOT),
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
    )
