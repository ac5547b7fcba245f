"""Shared utility helpers for ipweave."""

import re
from typing import Tuple


def parse_bit_range(bits_str: str) -> Tuple[int, int]:
    """Parse bit notation like ``[7:4]`` or ``[0]`` into ``(offset, width)``.

    Raises:
        ValueError: If notation is empty or invalid.
    """
    if not bits_str:
        raise ValueError("Empty bit range notation")

    clean = bits_str.strip().strip("[]").strip()

    match_range = re.fullmatch(r"(\d+)\s*:\s*(\d+)", clean)
    if match_range:
        msb = int(match_range.group(1))
        lsb = int(match_range.group(2))
        if msb < lsb:
            raise ValueError(f"Invalid bit range '{bits_str}': MSB must be >= LSB")
        return lsb, msb - lsb + 1

    match_single = re.fullmatch(r"(\d+)", clean)
    if match_single:
        return int(match_single.group(1)), 1

    raise ValueError(f"Invalid bit range notation: '{bits_str}'")


def parse_int(value: str) -> int:
    """Parse an integer literal with optional ``0x``/``0b``/``0o`` prefix.

    Underscores and the Verilog-style ``'h`` prefix are accepted, e.g.
    ``"0x1000"``, ``"4_096"``, ``"'hFF"``.
    """
    text = value.strip().replace("_", "")
    match = re.fullmatch(r"(?:\d+)?'([hdbo])([0-9a-fA-F]+)", text)
    if match:
        base = {"h": 16, "d": 10, "b": 2, "o": 8}[match.group(1)]
        return int(match.group(2), base)
    if text.isdigit():
        return int(text, 10)
    try:
        return int(text, 0)
    except ValueError:
        raise ValueError(f"Invalid integer literal: '{value}'") from None


def filter_none(data: dict) -> dict:
    """Remove keys with None values from a dictionary.

    Passing None explicitly to pydantic fields that have defaults fails
    validation; dropping the keys lets pydantic apply its defaults.
    """
    return {k: v for k, v in data.items() if v is not None}
