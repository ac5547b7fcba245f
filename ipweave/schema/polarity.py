"""
Decoding of the signed width encoding used by bus-signal schemas.

A schema leaf is either an integer or a symbolic width name, optionally
prefixed with ``-``. The magnitude is the bit width; the sign says whether
the signal flows from the role that declares the schema toward its peer
(positive) or back toward it (negative).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ipweave.errors import SchemaShapeError
from ipweave.model.bus import InterfaceRole

_SYMBOL = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Polarity(Enum):
    TOWARD_PEER = 1
    TOWARD_SELF = -1


class Direction(str, Enum):
    """Whether the component under generation drives or senses a signal."""

    DRIVE = "drive"
    SENSE = "sense"


@dataclass(frozen=True)
class SignalSpec:
    """Decoded bus-signal leaf: a numeric or symbolic width plus polarity."""

    polarity: Polarity
    width: Optional[int] = None
    symbol: Optional[str] = None

    @property
    def is_symbolic(self) -> bool:
        return self.width is None

    def __str__(self) -> str:
        sign = "" if self.polarity == Polarity.TOWARD_PEER else "-"
        return f"{sign}{self.symbol if self.is_symbolic else self.width}"


def resolve(encoded: Union[int, str]) -> SignalSpec:
    """
    Decode one bus-signal schema leaf.

    Examples:
        >>> resolve(-2)
        SignalSpec(polarity=<Polarity.TOWARD_SELF: -1>, width=2, symbol=None)
        >>> resolve("-dataWidth").symbol
        'dataWidth'

    Raises:
        SchemaShapeError: For zero widths, empty symbols or other value types.
    """
    if isinstance(encoded, bool) or not isinstance(encoded, (int, str)):
        raise SchemaShapeError(f"{encoded!r} is not a valid bus signal encoding")

    if isinstance(encoded, int):
        if encoded == 0:
            raise SchemaShapeError("bus signal width cannot be zero", value=encoded)
        polarity = Polarity.TOWARD_PEER if encoded > 0 else Polarity.TOWARD_SELF
        return SignalSpec(polarity=polarity, width=abs(encoded))

    text = encoded.strip()
    polarity = Polarity.TOWARD_PEER
    if text.startswith("-"):
        polarity = Polarity.TOWARD_SELF
        text = text[1:].strip()

    if text.isdigit():
        if int(text) == 0:
            raise SchemaShapeError("bus signal width cannot be zero", value=encoded)
        return SignalSpec(polarity=polarity, width=int(text))
    if not _SYMBOL.fullmatch(text):
        raise SchemaShapeError(f"{encoded!r} is not a valid symbolic bus signal width")
    return SignalSpec(polarity=polarity, symbol=text)


def effective_direction(polarity: Polarity, role: InterfaceRole) -> Direction:
    """
    Direction of a signal as seen by the component under generation.

    The component drives the signal iff the polarity points toward the
    peer XOR the interface is a sink. Monitors only observe.
    """
    if role == InterfaceRole.MONITOR:
        return Direction.SENSE
    toward_peer = polarity == Polarity.TOWARD_PEER
    is_sink = role == InterfaceRole.SINK
    return Direction.DRIVE if toward_peer != is_sink else Direction.SENSE
