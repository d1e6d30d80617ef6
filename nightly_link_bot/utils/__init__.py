"""
Utility modules for the nightly link bot.
"""

from nightly_link_bot.utils.logging import (
    get_logger,
    setup_logging,
    ContextLoggerAdapter,
    JSONFormatter,
    log_api_call,
    log_error_with_context,
)
from nightly_link_bot.utils.actions import (
    StatusReporter,
    ActionsReporter,
    LoggingReporter,
    escape_workflow_command,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ContextLoggerAdapter",
    "JSONFormatter",
    "log_api_call",
    "log_error_with_context",
    "StatusReporter",
    "ActionsReporter",
    "LoggingReporter",
    "escape_workflow_command",
]
