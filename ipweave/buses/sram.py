"""
Single- and dual-port RAM interfaces.

A component that is master of a RAM interface gets the memory itself
synthesized next to it as a ``SyncReadMem``. There is no diplomatic
adapter; the interface bundle travels through a bundle bridge.
"""

from ipweave.errors import StructuralError
from ipweave.model.bus import InterfaceRole

from .base import BusProtocol, InterfaceContext, RoleGenerators, SignalPath, render_snippet

SPRAM_SIGNALS = {
    "WREN": 1,
    "RDEN": 1,
    "BEN": 1,
    "ADDR": "addrWidth",
    "WRDATA": "dataWidth",
    "RDDATA": "-dataWidth",
}

DPRAM_SIGNALS = {
    "WREN": 1,
    "RDEN": 1,
    "BEN": 1,
    "WRADDR": "addrWidth",
    "WRDATA": "dataWidth",
    "RDADDR": "addrWidth",
    "RDDATA": "-dataWidth",
}


def sram_signal_name(path: SignalPath) -> str:
    return path[-1]


def _geometry(ctx: InterfaceContext, addr_signal: str) -> dict:
    data_width = ctx.require_width("WRDATA", "RDDATA")
    addr_width = ctx.require_width(addr_signal)
    lanes = ctx.width("BEN", 1)
    if data_width % lanes:
        raise StructuralError(
            f"bus interface '{ctx.name}': data width {data_width} is not a multiple "
            f"of {lanes} byte enable lanes"
        )
    return {
        "name": ctx.name,
        "depth": 1 << addr_width,
        "lanes": lanes,
        "lane_width": data_width // lanes,
        "has_ben": ctx.physical("BEN") is not None,
    }


def spram_node(ctx: InterfaceContext) -> str:
    return render_snippet("sram_node.scala.j2", dual_port=False, **_geometry(ctx, "ADDR"))


def dpram_node(ctx: InterfaceContext) -> str:
    return render_snippet("sram_node.scala.j2", dual_port=True, **_geometry(ctx, "WRADDR"))


SPRAM = BusProtocol(
    name="SPRAM",
    vendor="sifive.com",
    library="MEM",
    signals=SPRAM_SIGNALS,
    signal_name=sram_signal_name,
    roles={InterfaceRole.SOURCE: RoleGenerators(node=spram_node)},
)

DPRAM = BusProtocol(
    name="DPRAM",
    vendor="sifive.com",
    library="MEM",
    signals=DPRAM_SIGNALS,
    signal_name=sram_signal_name,
    roles={InterfaceRole.SOURCE: RoleGenerators(node=dpram_node)},
)
