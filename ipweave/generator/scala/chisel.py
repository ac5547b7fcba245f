"""Chisel type, port and import helpers shared by the Scala generators."""

from typing import Any, Iterable, List, Mapping, Sequence

from ipweave.model.port import Port, PortDirection
from ipweave.schema.walker import ParamLeaf

# Nested import spec: a string is one import (``""`` is a blank line), a
# mapping groups members under a package prefix.
WRAPPER_IMPORTS: List[Any] = [
    "chisel3._",
    "chisel3.experimental._",
    "chisel3.util._",
    "",
    {
        "freechips.rocketchip": [
            "amba.axi4._",
            "amba.apb._",
            "config._",
            "diplomacy._",
            "diplomaticobjectmodel.DiplomaticObjectModelAddressing",
            "diplomaticobjectmodel.logicaltree.{LogicalModuleTree, LogicalTreeNode}",
            "diplomaticobjectmodel.model.{OMComponent, OMDevice, OMInterrupt, OMMemoryRegion}",
            "interrupts._",
            "regmapper._",
            "subsystem._",
            "tilelink._",
            "util._",
        ]
    },
    "",
    "sifive.skeleton._",
]

REGMAP_IMPORTS: List[Any] = [
    "chisel3._",
    "",
    {
        "freechips.rocketchip": [
            "amba.axi4.HasAXI4ControlRegMap",
            "config.Parameters",
            "diplomacy.LazyModuleImp",
            "regmapper._",
            "tilelink.HasTLControlRegMap",
        ]
    },
]


def convert_type(width: int) -> str:
    """``Bool()`` for single bits, ``UInt((w).W)`` otherwise."""
    return "Bool()" if width == 1 else f"UInt(({width}).W)"


def port_declaration(port: Port) -> str:
    """Black box IO field for one physical port."""
    if port.direction == PortDirection.INOUT:
        return f"val {port.name} = Analog(({port.width}).W)"
    return f"val {port.name} = {port.direction.chisel}({convert_type(port.width)})"


def serialize_imports(imports: Iterable[Any], prefix: Sequence[str] = ()) -> str:
    """
    Render a nested import spec as Scala import lines, preserving order.

    Example:
        >>> serialize_imports(["chisel3._", {"a": ["b._", "c.D"]}])
        'import chisel3._\\nimport a.b._\\nimport a.c.D'
    """
    lines: List[str] = []
    for entry in imports:
        if isinstance(entry, Mapping):
            for package, members in entry.items():
                lines.append(serialize_imports(members, tuple(prefix) + (package,)))
        elif entry == "":
            lines.append("")
        else:
            lines.append("import " + ".".join(tuple(prefix) + (entry,)))
    return "\n".join(lines)


def param_declarations(params: Sequence[ParamLeaf]) -> List[str]:
    """``val <name>: Int`` for every parameter, in schema order."""
    return [f"val {p.name}: Int" for p in params]


def param_fields(params: Sequence[ParamLeaf]) -> List[str]:
    """Case class fields, with the schema default where there is one."""
    return [
        f"{p.name}: Int = {p.default}" if p.has_default else f"{p.name}: Int" for p in params
    ]


def param_assignments(params: Sequence[ParamLeaf], source: str) -> List[str]:
    """Named constructor arguments copied from ``source``: ``W = params.W``."""
    return [f"{p.name} = {source}.{p.name}" for p in params]
