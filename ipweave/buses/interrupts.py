"""
Interrupt lines.

Interrupt interfaces have no fixed signal schema: every mapped port
contributes its bits, in port-map order, to one diplomatic interrupt
vector. The generic wiring resolver cannot express that, so this protocol
supplies its own wiring.
"""

from typing import List

from ipweave.generator.scala.fragments import Connect, Fragment
from ipweave.model.bus import InterfaceRole

from .base import BusProtocol, InterfaceContext, RoleGenerators


def _line_count(ctx: InterfaceContext) -> int:
    return sum(port.width for port in ctx.mapped_ports())


def source_adapter(ctx: InterfaceContext) -> str:
    return f"IntSourceNode(IntSourcePortSimple(num = {_line_count(ctx)}, resources = device.int))"


def sink_adapter(ctx: InterfaceContext) -> str:
    return f"IntSinkNode(IntSinkPortSimple(1, {_line_count(ctx)}))"


def source_wiring(ctx: InterfaceContext) -> List[Fragment]:
    """Drive one interrupt line per port bit."""
    fragments: List[Fragment] = []
    line = 0
    for port in ctx.mapped_ports():
        for bit in range(port.width):
            source = f"blackbox.io.{port.name}"
            if port.width > 1:
                source += f"({bit})"
            fragments.append(Connect(sink=f"{ctx.name}0({line})", source=source))
            line += 1
    return fragments


def sink_wiring(ctx: InterfaceContext) -> List[Fragment]:
    """Gather interrupt lines back into the black box ports."""
    fragments: List[Fragment] = []
    line = 0
    for port in ctx.mapped_ports():
        if port.width == 1:
            source = f"{ctx.name}0({line})"
        else:
            source = f"Cat({ctx.name}0.slice({line}, {line + port.width}).reverse)"
        fragments.append(Connect(sink=f"blackbox.io.{port.name}", source=source))
        line += port.width
    return fragments


def source_node(ctx: InterfaceContext) -> str:
    return f"val {ctx.name}Node: IntOutwardNode = imp.{ctx.name}Node"


def sink_node(ctx: InterfaceContext) -> str:
    return f"val {ctx.name}Node: IntInwardNode = imp.{ctx.name}Node"


def source_attach(ctx: InterfaceContext) -> str:
    return f"bap.ibus.fromSync := {ctx.component_name}_top.{ctx.name}Node"


INTERRUPTS = BusProtocol(
    name="interrupts",
    vendor="sifive.com",
    library="basic",
    aliases=("interrupt",),
    roles={
        InterfaceRole.SOURCE: RoleGenerators(
            adapter=source_adapter,
            node=source_node,
            attach=source_attach,
            wiring=source_wiring,
        ),
        InterfaceRole.SINK: RoleGenerators(
            adapter=sink_adapter, node=sink_node, wiring=sink_wiring
        ),
    },
)
