#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/diagnostics.py
"""Diagnostic messages produced while parsing.

Every stage of the parser reports local problems (malformed IALs, unclosed
fences, table shape mismatches, ...) as :class:`Message` tuples instead of
raising. The collector gathers them; the final list is sorted by line
number, keeping the emission order of messages on the same line, and the
overall status is ``"error"`` as soon as one message has severity
``"error"`` or ``"warning"``.

"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple, Optional

from rich.console import Console
from rich.text import Text

from mdtree.constants import Severity, Status

logger = logging.getLogger(__name__)

_FAILING_SEVERITIES = frozenset({"error", "warning"})

_SEVERITY_STYLES = {"error": "bold red", "warning": "yellow", "deprecation": "cyan"}


class Message(NamedTuple):
    """A diagnostic message ``(severity, line, description)``.

    ``line`` is the 1-based source line, or 0 when the message cannot be
    attributed to a line.
    """

    severity: Severity
    line: int
    description: str


def sort_messages(messages: Iterable[Message]) -> list[Message]:
    """Sort messages by ascending line number, stable for equal lines."""
    return sorted(messages, key=lambda message: message.line)


def compute_status(messages: Iterable[Message]) -> Status:
    """Return ``"error"`` if any message is an error or warning, else ``"ok"``."""
    return "error" if any(message.severity in _FAILING_SEVERITIES for message in messages) else "ok"


def format_message(message: Message, filename: Optional[str] = None) -> str:
    """Format a message as ``<file>:<line>: <severity>: <description>``."""
    return f"{filename or '<no file>'}:{message.line}: {message.severity}: {message.description}"


def emit_messages(messages: Iterable[Message], filename: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Print messages to stderr, one per line.

    Parameters
    ----------
    messages : iterable of Message
        Messages to print, in the given order
    filename : str, optional
        Name shown as the message location prefix
    console : rich.console.Console, optional
        Console to print to; defaults to a stderr console

    """
    console = console or Console(stderr=True, highlight=False, soft_wrap=True)
    for message in messages:
        line = Text(format_message(message, filename), style=_SEVERITY_STYLES.get(message.severity, ""))
        console.print(line)


class DiagnosticsCollector:
    """Accumulates messages from every parsing stage.

    Examples
    --------
        >>> collector = DiagnosticsCollector()
        >>> collector.warning(2, 'Illegal attributes ["hello"] ignored in IAL')
        >>> collector.status
        'error'

    """

    def __init__(self, messages: Iterable[Message] | None = None) -> None:
        """Initialize the collector, optionally seeded with messages."""
        self._messages: list[Message] = list(messages or [])

    def __len__(self) -> int:
        return len(self._messages)

    def add(self, severity: Severity, line: int, description: str) -> None:
        """Record a message.

        Parameters
        ----------
        severity : {"error", "warning", "deprecation"}
            Message severity
        line : int
            Source line, 0 if unattributable
        description : str
            Human readable description

        """
        if line < 0:
            raise ValueError(f"line must be non-negative, got {line}")
        logger.debug("%s at line %d: %s", severity, line, description)
        self._messages.append(Message(severity, line, description))

    def error(self, line: int, description: str) -> None:
        """Record an error message."""
        self.add("error", line, description)

    def warning(self, line: int, description: str) -> None:
        """Record a warning message."""
        self.add("warning", line, description)

    def deprecation(self, line: int, description: str) -> None:
        """Record a deprecation message."""
        self.add("deprecation", line, description)

    def extend(self, messages: Iterable[Message]) -> None:
        """Append already built messages, keeping their order."""
        self._messages.extend(messages)

    @property
    def messages(self) -> list[Message]:
        """Messages in emission order."""
        return list(self._messages)

    @property
    def status(self) -> Status:
        """Overall status of the collected messages."""
        return compute_status(self._messages)

    def finalize(self) -> tuple[Status, list[Message]]:
        """Return the status and the messages sorted by line number."""
        return self.status, sort_messages(self._messages)
