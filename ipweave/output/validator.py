"""
Syntax validation of generated Scala using pyparsing.

The check is structural, not a Scala parser: the text must be non-empty
and its brackets, braces and parentheses must balance once comments and
string literals are masked out.
"""

import logging
from typing import List, Optional, Protocol, Tuple

from pyparsing import QuotedString, Regex, cpp_style_comment

logger = logging.getLogger(__name__)

_PAIRS = {")": "(", "]": "[", "}": "{"}
_OPENERS = set(_PAIRS.values())


class SourceValidator(Protocol):
    """Checks one generated artifact; returns a diagnostic, or ``None`` when valid."""

    def validate(self, text: str) -> Optional[str]:
        ...


class ScalaSyntaxValidator:
    """Bracket balance checker for the Scala dialect."""

    def __init__(self):
        """Initialize the masking grammar: comments, string and char literals."""
        self.triple_string = QuotedString('"""', multiline=True)
        self.string = QuotedString('"', esc_char="\\")
        self.char_literal = Regex(r"'(?:[^'\\\n]|\\.)'")
        self.masked = cpp_style_comment | self.triple_string | self.string | self.char_literal

    def mask(self, text: str) -> str:
        """Blank out comments and literals, keeping line breaks and offsets."""
        chars = list(text)
        for _, start, end in self.masked.scan_string(text):
            for i in range(start, end):
                if chars[i] != "\n":
                    chars[i] = " "
        return "".join(chars)

    def validate(self, text: str) -> Optional[str]:
        if not text.strip():
            return "output is empty"

        stack: List[Tuple[str, int, int]] = []
        for line_no, line in enumerate(self.mask(text).split("\n"), start=1):
            for col, char in enumerate(line, start=1):
                if char in _OPENERS:
                    stack.append((char, line_no, col))
                elif char in _PAIRS:
                    if not stack or stack[-1][0] != _PAIRS[char]:
                        return f"line {line_no}, column {col}: unexpected '{char}'"
                    stack.pop()

        if stack:
            char, line_no, col = stack[-1]
            return f"line {line_no}, column {col}: '{char}' is never closed"
        return None
