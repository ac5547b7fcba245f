"""
AXI4 and AXI4-Lite bridging through TileLink.

A slave (sink) interface is reached from the periphery bus through
``TLToAXI4``; a master (source) interface enters the front bus through
``AXI4ToTL``. Both flavors share the signal schema; AXI4-Lite drops the
deinterleaving and ID stages and fragments on the TileLink side instead.
"""

import logging

from ipweave.model.bus import InterfaceRole

from .base import (
    BusProtocol,
    InterfaceContext,
    MonitorDescriptor,
    RoleGenerators,
    SignalPath,
    render_snippet,
)

logger = logging.getLogger(__name__)

# Widths from the master's point of view: positive flows master -> slave.
AXI4_SIGNALS = {
    "aw": {
        "valid": 1,
        "ready": -1,
        "bits": {
            "id": "awIdWidth",
            "addr": "awAddrWidth",
            "len": 8,
            "size": 3,
            "burst": 2,
            "lock": 1,
            "cache": 4,
            "prot": 3,
            "qos": 4,
        },
    },
    "w": {
        "valid": 1,
        "ready": -1,
        "bits": {
            "data": "wDataWidth",
            "strb": "wStrbWidth",
            "last": 1,
        },
    },
    "b": {
        "valid": -1,
        "ready": 1,
        "bits": {
            "id": "-bIdWidth",
            "resp": -2,
        },
    },
    "ar": {
        "valid": 1,
        "ready": -1,
        "bits": {
            "id": "arIdWidth",
            "addr": "arAddrWidth",
            "len": 8,
            "size": 3,
            "burst": 2,
            "lock": 1,
            "cache": 4,
            "prot": 3,
            "qos": 4,
        },
    },
    "r": {
        "valid": -1,
        "ready": 1,
        "bits": {
            "id": "-rIdWidth",
            "data": "-rDataWidth",
            "resp": -2,
            "last": -1,
        },
    },
}

# Present in IP-XACT port maps but absent from the rocket-chip AXI4 bundle.
AXI4_RESERVED = {
    "aw": {"bits": {"region": 4}},
    "ar": {"bits": {"region": 4}},
}

DEFAULT_FIFO_BITS = 2


def axi4_signal_name(path: SignalPath) -> str:
    """``("aw", "bits", "addr") -> "AWADDR"``."""
    return (path[0] + path[-1]).upper()


def _is_lite(ctx: InterfaceContext) -> bool:
    return ctx.interface.bus_type.name.replace("-", "").upper() == "AXI4LITE"


def _id_bits(ctx: InterfaceContext) -> int:
    return max(ctx.width("ARID", 0), ctx.width("AWID", 0))


def master_adapter(ctx: InterfaceContext) -> str:
    return render_snippet(
        "axi4_master_adapter.scala.j2",
        component=ctx.component_name,
        id_count=1 << _id_bits(ctx),
    )


def slave_adapter(ctx: InterfaceContext) -> str:
    data_width = ctx.require_width("RDATA", "WDATA")
    addr_width = ctx.require_width("ARADDR", "AWADDR")
    beat_bytes = max(data_width // 8, 1)
    transfer = f"TransferSizes(1, {ctx.interface.prop('maxTransferSize', beat_bytes)})"
    logger.debug(
        "%s: AXI4 slave, %d data bits, %d address bits", ctx.name, data_width, addr_width
    )
    return render_snippet(
        "axi4_slave_adapter.scala.j2",
        params=ctx.params,
        address_span=f"0x{1 << addr_width:X}L",
        supports_write=transfer if ctx.physical("WDATA") else "TransferSizes.none",
        supports_read=transfer if ctx.physical("RDATA") else "TransferSizes.none",
        interleaved_id="Some(0)" if ctx.interface.prop("canInterleave", True) else "None",
        beat_bytes=beat_bytes,
    )


def bus_params(ctx: InterfaceContext) -> str:
    max_burst = ctx.interface.prop("maxBurst")
    return render_snippet(
        "axi4_params.scala.j2",
        name=ctx.name,
        with_base=ctx.interface.is_sink,
        max_burst=f"Some({max_burst})" if max_burst is not None else "None",
        max_fifo_bits=_id_bits(ctx) or DEFAULT_FIFO_BITS,
    )


def slave_node(ctx: InterfaceContext) -> str:
    beat_bytes = max(ctx.require_width("RDATA", "WDATA") // 8, 1)
    return render_snippet(
        "axi4_slave_node.scala.j2",
        name=ctx.name,
        params=ctx.top_params,
        lite=_is_lite(ctx),
        beat_bytes=beat_bytes,
    )


def master_node(ctx: InterfaceContext) -> str:
    return render_snippet(
        "axi4_master_node.scala.j2",
        name=ctx.name,
        params=ctx.top_params,
        lite=_is_lite(ctx),
    )


def slave_attach(ctx: InterfaceContext) -> str:
    return (
        f'bap.pbus.coupleTo("axi") {{ {ctx.component_name}_top.{ctx.name}Node '
        f":= TLWidthWidget(bap.pbus) := _ }}"
    )


def master_attach(ctx: InterfaceContext) -> str:
    return f'bap.fbus.coupleFrom("axi") {{ _ := {ctx.component_name}_top.{ctx.name}Node }}'


_ROLES = {
    InterfaceRole.SOURCE: RoleGenerators(
        adapter=master_adapter,
        params=bus_params,
        node=master_node,
        attach=master_attach,
    ),
    InterfaceRole.SINK: RoleGenerators(
        adapter=slave_adapter,
        params=bus_params,
        node=slave_node,
        attach=slave_attach,
    ),
}

AXI4 = BusProtocol(
    name="AXI4",
    vendor="amba.com",
    library="AMBA4",
    signals=AXI4_SIGNALS,
    reserved=AXI4_RESERVED,
    memory_mapped=True,
    signal_name=axi4_signal_name,
    roles=_ROLES,
    monitor=MonitorDescriptor(
        args="AXI4MonitorArgs",
        base_monitor="AXI4MonitorBase",
        edge_params="AXI4EdgeParameters",
        bundle="AXI4Bundle",
        imports=("freechips.rocketchip.amba.axi4._",),
    ),
)

AXI4_LITE = BusProtocol(
    name="AXI4-Lite",
    vendor="amba.com",
    library="AMBA4",
    aliases=("AXI4Lite",),
    signals=AXI4_SIGNALS,
    reserved=AXI4_RESERVED,
    memory_mapped=True,
    signal_name=axi4_signal_name,
    roles=_ROLES,
)
