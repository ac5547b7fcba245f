"""
Pydantic-based canonical data models for IP block descriptions.

Everything the generation engine consumes is expressed with these models.
They are immutable once loaded; generators only read them.
"""

from .base import VLNV, FlexibleModel, IpweaveBaseModel, StrictModel
from .bus import (
    DEFAULT_VIEW,
    AbstractionType,
    BusInterface,
    BusInterfaceMode,
    BusType,
    InterfaceRole,
)
from .component import Component
from .memory_map import (
    AccessType,
    AddressBlock,
    BlockUsage,
    FieldDef,
    MemoryMap,
    RegisterDef,
)
from .param_schema import ParamNode, ParamType
from .port import Port, PortDirection

__all__ = [
    # Base
    "IpweaveBaseModel",
    "StrictModel",
    "FlexibleModel",
    "VLNV",
    # Bus
    "DEFAULT_VIEW",
    "AbstractionType",
    "BusInterface",
    "BusInterfaceMode",
    "BusType",
    "InterfaceRole",
    # Memory
    "AccessType",
    "MemoryMap",
    "AddressBlock",
    "RegisterDef",
    "FieldDef",
    "BlockUsage",
    # Parameters
    "ParamNode",
    "ParamType",
    # Port
    "Port",
    "PortDirection",
    # Component
    "Component",
]
