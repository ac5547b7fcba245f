"""
Typed statement fragments produced by the wiring resolver.

Resolvers return these records instead of text; templates call
``render()`` to turn them into Scala lines.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Comment:
    """Marker left in the output, e.g. for a signal nobody drives."""

    text: str

    def render(self) -> str:
        return f"// {self.text}"


@dataclass(frozen=True)
class Connect:
    """Connection between a bridging-node signal and a black box port."""

    sink: str
    source: str
    bidirectional: bool = False

    def render(self) -> str:
        operator = "<>" if self.bidirectional else ":="
        return f"{self.sink} {operator} {self.source}"


@dataclass(frozen=True)
class DefaultDrive:
    """Constant drive for a node signal that has no physical port."""

    target: str
    value: str
    signal: str

    def render(self) -> str:
        return f"{self.target} := {self.value} // {self.signal}"


@dataclass(frozen=True)
class TieOff:
    """Constant tie-off of a black box input whose bus signal is reserved."""

    port: str
    value: str
    signal: str

    def render(self) -> str:
        return f"blackbox.io.{self.port} := {self.value} // {self.signal}"


Fragment = Union[Comment, Connect, DefaultDrive, TieOff]


def default_drive_value(width: int) -> str:
    return "true.B" if width == 1 else "0.U"


def tie_off_value(width: int) -> str:
    return "false.B" if width == 1 else "0.U"
