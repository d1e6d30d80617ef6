"""
Status reporting for the hosts that run the publisher.

GitHub Actions reads workflow commands from stdout: ``::error::`` marks the
step as failed and the process exit code decides the step result. The
webhook service has no such channel, so it reports through logging.
"""

import sys
from typing import Optional, TextIO

from nightly_link_bot.utils.logging import get_logger

logger = get_logger(__name__)


def escape_workflow_command(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return (
        message.replace("%", "%25")
        .replace("\r", "%0D")
        .replace("\n", "%0A")
    )


class StatusReporter:
    """Base reporter; records the first failure and the resulting exit code."""

    def __init__(self):
        self.failure_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.failure_message is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def info(self, message: str) -> None:
        raise NotImplementedError

    def set_failed(self, message: str) -> None:
        if self.failure_message is None:
            self.failure_message = message


class ActionsReporter(StatusReporter):
    """Reports to the GitHub Actions runner through stdout."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__()
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement is honoured
        return self._stream or sys.stdout

    def info(self, message: str) -> None:
        self.stream.write(f"{message}\n")
        self.stream.flush()

    def set_failed(self, message: str) -> None:
        super().set_failed(message)
        self.stream.write(f"::error::{escape_workflow_command(message)}\n")
        self.stream.flush()


class LoggingReporter(StatusReporter):
    """Reports through the structured logger; used by the webhook service."""

    def __init__(self, run_id: Optional[int] = None):
        super().__init__()
        self._logger = logger.with_context(run_id=run_id) if run_id is not None else logger

    def info(self, message: str) -> None:
        self._logger.info(message)

    def set_failed(self, message: str) -> None:
        super().set_failed(message)
        self._logger.error(f"Publishing failed: {message}")
