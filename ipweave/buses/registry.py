"""
Bus generator registry.

Read-only union of the per-protocol tables, keyed by protocol name or
alias (case-insensitive). Built once with :func:`build_default_registry`
and handed to the orchestrator explicitly.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Optional

from ipweave.model.bus import InterfaceRole

from .base import BusProtocol, Capability, InterfaceContext, MonitorDescriptor

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return name.strip().lower()


class GeneratorRegistry:
    """Immutable lookup table of bus protocols."""

    def __init__(self, protocols: Iterable[BusProtocol]):
        table = {}
        for protocol in protocols:
            for name in protocol.names:
                key = _key(name)
                if key in table and table[key] is not protocol:
                    raise ValueError(
                        f"protocol name '{name}' is registered by both "
                        f"'{table[key].name}' and '{protocol.name}'"
                    )
                table[key] = protocol
        self._protocols = MappingProxyType(table)

    def __contains__(self, name: str) -> bool:
        return _key(name) in self._protocols

    @property
    def protocol_names(self) -> list:
        """Canonical names of all registered protocols, in registration order."""
        seen = []
        for protocol in self._protocols.values():
            if protocol.name not in seen:
                seen.append(protocol.name)
        return seen

    def protocol(self, name: str) -> Optional[BusProtocol]:
        return self._protocols.get(_key(name))

    def lookup(
        self, name: str, role: InterfaceRole, capability: Capability
    ) -> Optional[Callable[[InterfaceContext], Any]]:
        """
        Generator for one capability of one (protocol, role) pair.

        Returns ``None`` when the protocol is unknown or does not provide the
        capability for that role; callers fall back to generic output.
        """
        protocol = self.protocol(name)
        if protocol is None:
            return None
        generator = protocol.generators(role).get(capability)
        if generator is None:
            logger.debug("No %s generator for %s/%s", capability.value, name, role.value)
        return generator

    def is_memory_mapped(self, name: str) -> bool:
        protocol = self.protocol(name)
        return protocol is not None and protocol.memory_mapped

    def monitor_descriptor(self, name: str) -> Optional[MonitorDescriptor]:
        protocol = self.protocol(name)
        return protocol.monitor if protocol is not None else None


def build_default_registry() -> GeneratorRegistry:
    """Registry with every built-in protocol."""
    from .apb import APB4
    from .axi4 import AXI4, AXI4_LITE
    from .interrupts import INTERRUPTS
    from .sram import DPRAM, SPRAM

    return GeneratorRegistry([AXI4, AXI4_LITE, APB4, SPRAM, DPRAM, INTERRUPTS])
