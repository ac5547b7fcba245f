"""
Port wiring resolver.

Connects the bridging node of one bus interface to the black box ports
listed in the interface's port map, one statement per bus signal. Signals
the port map leaves out are either given a constant default drive (when a
protocol adapter needs a legal value) or left as a comment marker for
review; they never raise.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from ipweave.buses.base import BusProtocol, Capability, InterfaceContext
from ipweave.buses.registry import GeneratorRegistry
from ipweave.errors import SchemaShapeError
from ipweave.model.bus import DEFAULT_VIEW, BusInterface
from ipweave.model.component import Component
from ipweave.model.port import Port, PortDirection
from ipweave.schema.polarity import Direction, effective_direction, resolve
from ipweave.schema.walker import reduce

from .fragments import (
    Comment,
    Connect,
    DefaultDrive,
    Fragment,
    TieOff,
    default_drive_value,
    tie_off_value,
)

logger = logging.getLogger(__name__)


def check_port_map(
    component: Component, interface: BusInterface, view: str = DEFAULT_VIEW
) -> None:
    """
    Raises:
        SchemaShapeError: If the port map names a port the component lacks.
    """
    ports = component.ports_by_name
    for abstract, physical in interface.port_map(view).items():
        if physical not in ports:
            raise SchemaShapeError(
                f"bus interface '{interface.name}' maps '{abstract}' to undeclared "
                f"port {physical!r}",
                value=physical,
                allowed=list(ports),
            )


def flatten_signals(protocol: BusProtocol) -> List[Tuple[Tuple[str, ...], object, bool]]:
    """Signal schema leaves followed by reserved leaves as ``(path, encoded, reserved)``."""
    regular = reduce(protocol.signals, leaf=lambda node, path: [(path, node, False)])
    reserved = reduce(protocol.reserved, leaf=lambda node, path: [(path, node, True)])
    return regular + reserved


def connect(target: str, port: Port) -> Connect:
    """Direct connection, oriented by the physical port's own direction."""
    physical = f"blackbox.io.{port.name}"
    if port.direction == PortDirection.OUT:
        return Connect(sink=target, source=physical)
    if port.direction == PortDirection.IN:
        return Connect(sink=physical, source=target)
    return Connect(sink=physical, source=target, bidirectional=True)


def wire(
    component: Component,
    interface: BusInterface,
    registry: GeneratorRegistry,
    view: str = DEFAULT_VIEW,
) -> List[Fragment]:
    """Wiring statements for one bus interface instance."""
    protocol_name = interface.bus_type.name
    fragments: List[Fragment] = [
        Comment(f"wiring for {interface.name} of type {protocol_name}")
    ]
    port_map = interface.port_map(view)

    protocol = registry.protocol(protocol_name)
    if protocol is None:
        logger.warning(
            "Interface '%s' uses unknown protocol '%s'; leaving its port map as a comment",
            interface.name,
            protocol_name,
        )
        fragments.append(Comment(json.dumps(port_map)))
        return fragments

    check_port_map(component, interface, view)
    ctx = InterfaceContext(component=component, interface=interface, view=view)
    role = interface.role

    override = registry.lookup(protocol_name, role, Capability.WIRING)
    if override is not None:
        fragments.extend(override(ctx))
        return fragments

    has_adapter = registry.lookup(protocol_name, role, Capability.ADAPTER) is not None
    ports = component.ports_by_name
    lookup: Dict[str, str] = {k.lower(): v for k, v in port_map.items()}
    group: Optional[str] = None

    leaves = flatten_signals(protocol)
    for path, encoded, reserved in leaves:
        if not reserved and len(path) > 1 and path[0] != group:
            group = path[0]
            fragments.append(Comment(group))

        spec = resolve(encoded)
        abstract = protocol.signal_name(path)
        target = f"{interface.name}0.{'.'.join(path)}"
        physical = lookup.get(abstract.lower())
        direction = effective_direction(spec.polarity, role)

        if reserved and physical is not None:
            port = ports[physical]
            if direction == Direction.SENSE and port.direction != PortDirection.OUT:
                fragments.append(TieOff(physical, tie_off_value(port.width), abstract))
            else:
                fragments.append(Comment(abstract))
        elif reserved:
            continue
        elif physical is not None:
            fragments.append(connect(target, ports[physical]))
        elif has_adapter and direction == Direction.DRIVE:
            width = spec.width if spec.width is not None else 0
            fragments.append(DefaultDrive(target, default_drive_value(width), abstract))
        else:
            fragments.append(Comment(abstract))

    known = {protocol.signal_name(path).lower() for path, _, _ in leaves}
    unmatched = [a for a in port_map if a.lower() not in known]
    if unmatched:
        logger.debug(
            "%s: port map entries outside %s: %s", interface.name, protocol.name, unmatched
        )
    return fragments
