import os
import sys

import pytest

# Add the project root to sys.path so that ipweave is importable
# This is needed because of the flat layout structure
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ipweave.buses import build_default_registry  # noqa: E402
from ipweave.model import Component  # noqa: E402

AXI4_SLAVE_PORT_MAP = {
    "AWVALID": "s_awvalid",
    "AWREADY": "s_awready",
    "AWADDR": "s_awaddr",
    "WVALID": "s_wvalid",
    "WREADY": "s_wready",
    "WDATA": "s_wdata",
    "WSTRB": "s_wstrb",
    "BVALID": "s_bvalid",
    "BREADY": "s_bready",
    "ARVALID": "s_arvalid",
    "ARREADY": "s_arready",
    "ARADDR": "s_araddr",
    "RVALID": "s_rvalid",
    "RREADY": "s_rready",
    "RDATA": "s_rdata",
}


def rtl_view(port_map):
    return [{"viewRef": "RTLview", "portMaps": dict(port_map)}]


@pytest.fixture
def registry():
    """Registry with every built-in protocol."""
    return build_default_registry()


@pytest.fixture
def blinky_data():
    """Description of an AXI4 slave with an interrupt output and two registers."""
    return {
        "name": "Blinky",
        "vendor": "sifive.com",
        "library": "blocks",
        "version": "0.1.0",
        "pSchema": {
            "type": "object",
            "properties": {
                "dataWidth": {"type": "integer", "default": 32},
                "fifo": {
                    "type": "object",
                    "properties": {"depth": {"type": "integer", "default": 4}},
                },
            },
        },
        "ports": [
            {"name": "clk", "direction": "in"},
            {"name": "reset_n", "direction": "in"},
            {"name": "s_awvalid", "direction": "in"},
            {"name": "s_awready", "direction": "out"},
            {"name": "s_awaddr", "direction": "in", "width": 12},
            {"name": "s_wvalid", "direction": "in"},
            {"name": "s_wready", "direction": "out"},
            {"name": "s_wdata", "direction": "in", "width": 32},
            {"name": "s_wstrb", "direction": "in", "width": 4},
            {"name": "s_bvalid", "direction": "out"},
            {"name": "s_bready", "direction": "in"},
            {"name": "s_arvalid", "direction": "in"},
            {"name": "s_arready", "direction": "out"},
            {"name": "s_araddr", "direction": "in", "width": 12},
            {"name": "s_rvalid", "direction": "out"},
            {"name": "s_rready", "direction": "in"},
            {"name": "s_rdata", "direction": "out", "width": 32},
            {"name": "irq", "direction": "out", "width": 2},
        ],
        "busInterfaces": [
            {
                "name": "ctrl",
                "busType": {"vendor": "amba.com", "library": "AMBA4", "name": "AXI4"},
                "interfaceMode": "slave",
                "abstractionTypes": rtl_view(AXI4_SLAVE_PORT_MAP),
            },
            {
                "name": "intr",
                "busType": {"vendor": "sifive.com", "library": "basic", "name": "interrupts"},
                "interfaceMode": "master",
                "abstractionTypes": rtl_view({"IRQ": "irq"}),
            },
        ],
        "memoryMaps": [
            {
                "name": "csr",
                "addressBlocks": [
                    {
                        "name": "ctrl",
                        "usage": "register",
                        "width": 32,
                        "registers": [
                            {
                                "name": "CTRL",
                                "addressOffset": 0,
                                "size": 32,
                                "access": "read-write",
                                "fields": [{"name": "EN", "bitOffset": 0, "bitWidth": 1}],
                            },
                            {
                                "name": "STATUS",
                                "addressOffset": 4,
                                "size": 32,
                                "access": "read-only",
                                "fields": [
                                    {"name": "BUSY", "bitOffset": 0, "bitWidth": 1},
                                    {"name": "COUNT", "bitOffset": 8, "bitWidth": 8},
                                ],
                            },
                        ],
                    }
                ],
            }
        ],
    }


@pytest.fixture
def blinky(blinky_data):
    return Component.model_validate(blinky_data)


@pytest.fixture
def empty_component():
    """Component with no ports, interfaces, memory maps or parameters."""
    return Component(name="Empty")


@pytest.fixture
def snoop():
    """Component with a single AXI4 monitor interface."""
    return Component.model_validate(
        {
            "name": "Snoop",
            "vendor": "sifive.com",
            "library": "debug",
            "version": "1.0",
            "pSchema": {
                "type": "object",
                "properties": {"idWidth": {"type": "integer", "default": 4}},
            },
            "ports": [
                {"name": "m_awvalid", "direction": "in"},
                {"name": "m_awready", "direction": "in"},
                {"name": "m_awaddr", "direction": "in", "width": 32},
                {"name": "m_rdata", "direction": "in", "width": 64},
                {"name": "error", "direction": "out"},
            ],
            "busInterfaces": [
                {
                    "name": "mon",
                    "busType": {"vendor": "amba.com", "library": "AMBA4", "name": "AXI4"},
                    "interfaceMode": "monitor",
                    "abstractionTypes": rtl_view(
                        {
                            "AWVALID": "m_awvalid",
                            "AWREADY": "m_awready",
                            "AWADDR": "m_awaddr",
                            "RDATA": "m_rdata",
                        }
                    ),
                }
            ],
        }
    )
