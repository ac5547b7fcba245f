"""Errors raised while loading component descriptions."""

from pathlib import Path
from typing import Iterable, Optional


class ParseError(Exception):
    """
    A component description could not be loaded.

    The message is prefixed with ``<file>:<line>`` where known and with the
    component name once it has been read; individual validation issues
    follow, one per line.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Path] = None,
        line: Optional[int] = None,
        component: Optional[str] = None,
        issues: Iterable[str] = (),
    ):
        self.file_path = file_path
        self.line = line
        self.component = component
        self.issues = list(issues)
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        location = str(self.file_path) if self.file_path else ""
        if location and self.line is not None:
            location += f":{self.line}"

        head = message
        if self.component:
            head = f"component '{self.component}': {head}"
        if location:
            head = f"{location}: {head}"
        return "\n  ".join([head] + self.issues)
