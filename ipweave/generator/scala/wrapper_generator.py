"""Block wrapper generation mixin for ``ScalaGenerator``."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Set

if TYPE_CHECKING:
    from ._protocols import GeneratorHost

from ipweave.buses.base import BusProtocol, Capability, InterfaceContext
from ipweave.model.bus import BusInterface
from ipweave.model.component import Component
from ipweave.model.port import PortDirection
from ipweave.schema.polarity import Direction, effective_direction, resolve
from ipweave.utils.text import indent_block

from .chisel import convert_type, port_declaration
from .fragments import Connect, Fragment, TieOff
from .wiring import check_port_map, wire

logger = logging.getLogger(__name__)

BLACKBOX_IO = "blackbox.io."


def _schema_bundle(
    ctx: InterfaceContext, protocol: BusProtocol, node: Mapping[str, Any], path=()
) -> List[str]:
    """Bundle fields for a signal schema group, nested groups as anonymous bundles."""
    lines: List[str] = []
    for key, child in node.items():
        child_path = path + (key,)
        if isinstance(child, Mapping):
            inner = _schema_bundle(ctx, protocol, child, child_path)
            lines.append(f"val {key} = new Bundle {{")
            if inner:
                lines.append(indent_block(inner, 2))
            lines.append("}")
            continue

        spec = resolve(child)
        abstract = protocol.signal_name(child_path)
        width = ctx.width(abstract, spec.width)
        if width is None:
            lines.append(f"// {abstract}: width {spec} is not mapped")
            continue
        drive = effective_direction(spec.polarity, ctx.interface.role) == Direction.DRIVE
        lines.append(f"val {key} = {'Output' if drive else 'Input'}({convert_type(width)})")
    return lines


def _port_map_bundle(ctx: InterfaceContext) -> List[str]:
    """Bundle fields of an unknown protocol, one per port map entry."""
    lines = []
    for abstract, physical in ctx.port_map.items():
        port = ctx.component.get_port(physical)
        if port.direction == PortDirection.INOUT:
            lines.append(f"val {abstract} = Analog(({port.width}).W)")
        else:
            lines.append(f"val {abstract} = {port.direction.chisel}({convert_type(port.width)})")
    return lines


def _driven_ports(fragments: List[Fragment]) -> Set[str]:
    """Black box ports that interface wiring statements assign."""
    ports = set()
    for fragment in fragments:
        if isinstance(fragment, TieOff):
            ports.add(fragment.port)
        elif isinstance(fragment, Connect) and fragment.sink.startswith(BLACKBOX_IO):
            ports.add(fragment.sink[len(BLACKBOX_IO) :].split("(")[0])
    return ports


def _port_wiring(component: Component, skip: set) -> List[Connect]:
    fragments = []
    for port in component.ports:
        if port.name in skip:
            continue
        bridge = f"ioBridgeSource.bundle.{port.name}"
        physical = f"blackbox.io.{port.name}"
        if port.direction == PortDirection.OUT:
            fragments.append(Connect(sink=bridge, source=physical))
        elif port.direction == PortDirection.INOUT:
            fragments.append(Connect(sink=bridge, source=physical, bidirectional=True))
        else:
            fragments.append(Connect(sink=physical, source=bridge))
    return fragments


class WrapperGenerationMixin:
    """Mixin for the black box wrapper (base) and its user scaffolding."""

    def memory_slaves(self: GeneratorHost, component: Component) -> List[BusInterface]:
        """Sink interfaces of memory-mapped protocols; each needs a base address."""
        return [
            bus
            for bus in component.bus_interfaces
            if bus.is_sink and self.registry.is_memory_mapped(bus.bus_type.name)
        ]

    def _interface_view(
        self: GeneratorHost, component: Component, interface: BusInterface
    ) -> Dict[str, Any]:
        """Every generated snippet of one interface, with fallbacks filled in."""
        check_port_map(component, interface, self.view)
        ctx = InterfaceContext(component=component, interface=interface, view=self.view)
        name = interface.name
        protocol_name = interface.bus_type.name
        role = interface.role
        protocol = self.registry.protocol(protocol_name)
        marker = f"busType: {protocol_name}, mode: {interface.interface_mode.value}"

        def capability(cap: Capability):
            return self.registry.lookup(protocol_name, role, cap)

        adapter = capability(Capability.ADAPTER)
        params = capability(Capability.PARAMS)
        node = capability(Capability.NODE)
        attach = capability(Capability.ATTACH)

        if adapter is not None:
            bundle = None
            lazy_node = adapter(ctx)
        else:
            if protocol is not None:
                bundle = _schema_bundle(ctx, protocol, protocol.signals)
            else:
                bundle = _port_map_bundle(ctx)
            lazy_node = f"BundleBridgeSource(() => new {name}Bundle())"

        side = "in" if adapter is not None and interface.is_sink else "out"

        if node is not None:
            top_node = node(ctx)
        else:
            top_node = "\n".join(
                [
                    f"val {name}Node = BundleBridgeSink[{name}Bundle]()",
                    f"{name}Node := imp.{name}Node",
                    f"val {name} = InModuleBody {{ {name}Node.makeIO() }}",
                ]
            )

        logger.debug(
            "%s: %s %s (adapter: %s, node: %s)",
            name,
            protocol_name,
            role.value,
            adapter is not None,
            node is not None,
        )
        return {
            "name": name,
            "bundle": bundle,
            "lazy_node": lazy_node,
            "alias": f"val {name}0 = {name}Node.{side}(0)._1",
            "wiring": wire(component, interface, self.registry, self.view),
            "params": (
                params(ctx) if params is not None else f"case class P{name}Params() // {marker}"
            ),
            "top_node": top_node,
            "attach": attach(ctx) if attach is not None else f"// {marker}",
        }

    def _wrapper_context(self: GeneratorHost, component: Component) -> Dict[str, Any]:
        context = self._get_template_context(component)
        params = context["params"]
        slaves = [bus.name for bus in self.memory_slaves(component)]

        interfaces = [self._interface_view(component, bus) for bus in component.bus_interfaces]

        driven = set()
        for view in interfaces:
            driven.update(_driven_ports(view["wiring"]))
        driven_inputs = {
            port.name
            for port in component.ports
            if port.name in driven and port.direction == PortDirection.IN
        }

        context.update(
            {
                "interfaces": interfaces,
                "port_decls": [port_declaration(port) for port in component.ports],
                "blackbox_params": [f'"{p.name}" -> IntParam({p.name})' for p in params],
                "params_fields": context["param_fields"]
                + [f"{bus.name}Params: P{bus.name}Params" for bus in component.bus_interfaces]
                + ["cacheBlockBytes: Int"],
                "param_aliases": [f"val {p.name} = c.{p.name}" for p in params],
                "lazy_param_args": [f"c.{p.name}" for p in params],
                "top_param_aliases": [f"val {p.name}: Int = c.blackbox.{p.name}" for p in params],
                "port_wiring": _port_wiring(component, driven_inputs),
                "memory_slaves": slaves,
                "base_args": [f"{s}_base: BigInt" for s in slaves],
                "defaults_args": [f"{s}_base: BigInt" for s in slaves] + ["cacheBlockBytes: Int"],
                "defaults_fields": [
                    f"{bus.name}Params = P{bus.name}Params("
                    + (f"base = {bus.name}_base" if bus.name in slaves else "")
                    + ")"
                    for bus in component.bus_interfaces
                ]
                + ["cacheBlockBytes = cacheBlockBytes"],
                "with_defaults": [f"{s}_base = {s}_base" for s in slaves]
                + ["cacheBlockBytes = site(CacheBlockBytes)"],
            }
        )
        return context

    def generate_wrapper_base(self: GeneratorHost, component: Component) -> str:
        """Generate the regenerated wrapper: black box, lazy module, top and config."""
        return self.render("wrapper_base.scala.j2", **self._wrapper_context(component))

    def generate_wrapper_user(self: GeneratorHost, component: Component) -> str:
        """Generate the user scaffolding subclasses and config."""
        context = self._get_template_context(component)
        context["user_bases"] = [
            f"{bus.name}_base = 0x{i + 1:X}000000000000L"
            for i, bus in enumerate(self.memory_slaves(component))
        ]
        return self.render("wrapper_user.scala.j2", **context)

    def interface_summary(self, component: Component) -> Optional[str]:
        """One-line description of the interfaces, for log messages."""
        if not component.bus_interfaces:
            return None
        return ", ".join(
            f"{bus.name}:{bus.bus_type.name}/{bus.role.value}" for bus in component.bus_interfaces
        )
