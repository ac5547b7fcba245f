"""APB4 bridging through TileLink."""

from ipweave.model.bus import InterfaceRole

from .base import (
    BusProtocol,
    InterfaceContext,
    MonitorDescriptor,
    RoleGenerators,
    SignalPath,
    render_snippet,
)

# Requester's point of view: positive flows requester -> completer.
APB_SIGNALS = {
    "psel": 1,
    "penable": 1,
    "pwrite": 1,
    "paddr": "addrWidth",
    "pprot": 3,
    "pwdata": "dataWidth",
    "pstrb": "strbWidth",
    "pready": -1,
    "pslverr": -1,
    "prdata": "-dataWidth",
}


def apb_signal_name(path: SignalPath) -> str:
    return path[-1].upper()


def master_adapter(ctx: InterfaceContext) -> str:
    return render_snippet("apb_master_adapter.scala.j2", component=ctx.component_name)


def slave_adapter(ctx: InterfaceContext) -> str:
    data_width = ctx.require_width("PRDATA", "PWDATA")
    addr_width = ctx.require_width("PADDR")
    return render_snippet(
        "apb_slave_adapter.scala.j2",
        params=ctx.params,
        address_span=f"0x{1 << addr_width:X}L",
        beat_bytes=max(data_width // 8, 1),
    )


def slave_params(ctx: InterfaceContext) -> str:
    return render_snippet("apb_params.scala.j2", name=ctx.name)


def slave_node(ctx: InterfaceContext) -> str:
    data_width = ctx.require_width("PRDATA", "PWDATA")
    return render_snippet(
        "apb_slave_node.scala.j2", name=ctx.name, beat_bytes=max(data_width // 8, 1)
    )


def master_node(ctx: InterfaceContext) -> str:
    return render_snippet("apb_master_node.scala.j2", name=ctx.name)


def slave_attach(ctx: InterfaceContext) -> str:
    return (
        f'bap.pbus.coupleTo("apb") {{ {ctx.component_name}_top.{ctx.name}Node '
        f":= TLWidthWidget(bap.pbus) := _ }}"
    )


def master_attach(ctx: InterfaceContext) -> str:
    return f'bap.fbus.coupleFrom("apb") {{ _ := {ctx.component_name}_top.{ctx.name}Node }}'


APB4 = BusProtocol(
    name="APB4",
    vendor="amba.com",
    library="AMBA4",
    aliases=("APB",),
    signals=APB_SIGNALS,
    memory_mapped=True,
    signal_name=apb_signal_name,
    roles={
        InterfaceRole.SOURCE: RoleGenerators(
            adapter=master_adapter, node=master_node, attach=master_attach
        ),
        InterfaceRole.SINK: RoleGenerators(
            adapter=slave_adapter, params=slave_params, node=slave_node, attach=slave_attach
        ),
    },
    monitor=MonitorDescriptor(
        args="APBMonitorArgs",
        base_monitor="APBMonitorBase",
        edge_params="APBEdgeParameters",
        bundle="APBBundle",
        imports=("freechips.rocketchip.amba.apb._",),
    ),
)
