"""
Building blocks of the bus generator registry.

Each bus protocol is a static :class:`BusProtocol` table: its signal
schema, flags and one optional :class:`RoleGenerators` per interface role.
Every capability of a role is optional; ``None`` means "not provided" and
callers fall back to generic output.
"""

import functools
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ipweave.errors import IncompleteInterfaceError
from ipweave.model.bus import DEFAULT_VIEW, BusInterface, InterfaceRole
from ipweave.model.component import Component
from ipweave.model.port import Port
from ipweave.utils.text import indent_block, scala_string

SignalPath = Tuple[str, ...]


class Capability(str, Enum):
    """Generator capabilities a protocol may provide per role."""

    ADAPTER = "adapter"
    PARAMS = "params"
    NODE = "node"
    ATTACH = "attach"
    WIRING = "wiring"


@dataclass(frozen=True)
class InterfaceContext:
    """Everything a capability generator needs to know about one interface."""

    component: Component
    interface: BusInterface
    view: str = DEFAULT_VIEW

    @property
    def name(self) -> str:
        return self.interface.name

    @property
    def component_name(self) -> str:
        return self.component.name

    @property
    def params(self) -> str:
        """Parameter record reference inside the lazy module."""
        return f"c.{self.name}Params"

    @property
    def top_params(self) -> str:
        """Parameter record reference inside the top-level wrapper."""
        return f"c.blackbox.{self.name}Params"

    @property
    def port_map(self) -> Dict[str, str]:
        return self.interface.port_map(self.view)

    def physical(self, signal: str) -> Optional[str]:
        """Physical port name mapped to an abstract signal (case-insensitive)."""
        wanted = signal.lower()
        for abstract, physical in self.port_map.items():
            if abstract.lower() == wanted:
                return physical
        return None

    def port(self, signal: str) -> Optional[Port]:
        physical = self.physical(signal)
        if physical is None:
            return None
        return self.component.get_port(physical)

    def width(self, signal: str, default: Optional[int] = None) -> Optional[int]:
        port = self.port(signal)
        return port.width if port is not None else default

    def require_width(self, *signals: str) -> int:
        """
        Widest port among ``signals``.

        Raises:
            IncompleteInterfaceError: If none of the signals is mapped.
        """
        widths = [w for w in (self.width(s) for s in signals) if w is not None]
        if not widths:
            raise IncompleteInterfaceError(
                self.name, " or ".join(signals), self.interface.bus_type.name
            )
        return max(widths)

    def mapped_ports(self) -> List[Port]:
        """Declared ports referenced by the port map, in port-map order."""
        ports = self.component.ports_by_name
        return [ports[p] for p in self.port_map.values() if p in ports]


SnippetGenerator = Callable[[InterfaceContext], str]
WiringGenerator = Callable[[InterfaceContext], List[Any]]


@dataclass(frozen=True)
class RoleGenerators:
    """Optional capability generators for one (protocol, role) pair."""

    adapter: Optional[SnippetGenerator] = None
    params: Optional[SnippetGenerator] = None
    node: Optional[SnippetGenerator] = None
    attach: Optional[SnippetGenerator] = None
    wiring: Optional[WiringGenerator] = None

    def get(self, capability: Capability) -> Optional[Callable[[InterfaceContext], Any]]:
        return getattr(self, capability.value)


@dataclass(frozen=True)
class MonitorDescriptor:
    """Scala names needed to synthesize a passive bus monitor."""

    args: str
    base_monitor: str
    edge_params: str
    bundle: str
    imports: Tuple[str, ...] = ()


def default_signal_name(path: SignalPath) -> str:
    """First and last path keys joined: ``("aw", "bits", "id") -> "awid"``."""
    return path[0] if len(path) == 1 else path[0] + path[-1]


@dataclass(frozen=True)
class BusProtocol:
    """Static description of one bus protocol."""

    name: str
    vendor: str = ""
    library: str = ""
    aliases: Tuple[str, ...] = ()
    signals: Mapping[str, Any] = field(default_factory=dict)
    reserved: Mapping[str, Any] = field(default_factory=dict)
    memory_mapped: bool = False
    signal_name: Callable[[SignalPath], str] = default_signal_name
    roles: Mapping[InterfaceRole, RoleGenerators] = field(default_factory=dict)
    monitor: Optional[MonitorDescriptor] = None

    @property
    def names(self) -> Sequence[str]:
        return (self.name,) + tuple(self.aliases)

    def generators(self, role: InterfaceRole) -> RoleGenerators:
        return self.roles.get(role, RoleGenerators())


@functools.lru_cache(maxsize=None)
def snippet_environment() -> Environment:
    """Jinja2 environment for the per-protocol Scala snippets."""
    env = Environment(
        loader=FileSystemLoader(os.path.join(os.path.dirname(__file__), "templates")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )
    env.filters["block"] = indent_block
    env.filters["scala_string"] = scala_string
    return env


def render_snippet(template_name: str, **context: Any) -> str:
    return snippet_environment().get_template(template_name).render(**context)
