"""Text helpers shared by the Jinja2 environments."""

from typing import Iterable, Union


def indent_block(text: Union[str, Iterable[str]], width: int = 2, sep: str = "") -> str:
    """
    Indent every line of ``text`` by ``width`` spaces.

    ``text`` may be a list of items; each item may span several lines.
    ``sep`` is appended to every line but the last, which turns a list of
    single-line items into a comma separated argument list.

    Example:
        >>> indent_block(["a: Int", "b: Int"], 2, ",")
        '  a: Int,\\n  b: Int'
    """
    items = [text] if isinstance(text, str) else list(text)
    lines = []
    for item in items:
        lines.extend(str(item).split("\n"))
    prefix = " " * width
    return (sep + "\n").join(prefix + line if line else line for line in lines)


def scala_string(value: object) -> str:
    """Quote ``value`` as a Scala string literal."""
    text = "" if value is None else str(value)
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'
