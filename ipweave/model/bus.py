"""
Bus interface definitions for components.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from ipweave.errors import SchemaShapeError

from .base import VLNV, StrictModel

DEFAULT_VIEW = "RTLview"


class BusType(VLNV):
    """
    Bus protocol identifier.

    References a bus protocol (AXI4, APB4, SPRAM, ...) by vendor, library
    and name. Inherits validation, immutability and factory methods from VLNV.
    """

    vendor: str = Field(default="", description="Bus standard vendor")
    library: str = Field(default="", description="Bus library")
    name: str = Field(..., description="Bus protocol name")
    version: str = Field(default="", description="Bus version")


class BusInterfaceMode(str, Enum):
    """Enumeration for bus interface modes."""

    MASTER = "master"
    SLAVE = "slave"
    SOURCE = "source"
    SINK = "sink"
    MONITOR = "monitor"


class InterfaceRole(str, Enum):
    """Role of an interface relative to its peer, independent of naming style."""

    SOURCE = "source"
    SINK = "sink"
    MONITOR = "monitor"


_MODE_TO_ROLE = {
    BusInterfaceMode.MASTER: InterfaceRole.SOURCE,
    BusInterfaceMode.SOURCE: InterfaceRole.SOURCE,
    BusInterfaceMode.SLAVE: InterfaceRole.SINK,
    BusInterfaceMode.SINK: InterfaceRole.SINK,
    BusInterfaceMode.MONITOR: InterfaceRole.MONITOR,
}


class AbstractionType(StrictModel):
    """View-scoped mapping from abstract signal names to physical port names."""

    view_ref: str = Field(default=DEFAULT_VIEW, description="View this mapping belongs to")
    port_maps: Dict[str, str] = Field(
        default_factory=dict, description="Abstract signal name -> physical port name"
    )


class BusInterface(StrictModel):
    """
    Bus interface of a component.

    Groups physical ports under one bus protocol with a role. The port map
    of the selected abstraction view tells which physical port carries each
    abstract signal of the protocol.
    """

    name: str = Field(..., description="Interface name")
    bus_type: BusType = Field(..., description="Bus protocol identifier")
    interface_mode: BusInterfaceMode = Field(..., description="master/slave/source/sink/monitor")
    abstraction_types: List[AbstractionType] = Field(
        default_factory=list, description="Port maps per view"
    )
    props: Dict[str, Any] = Field(
        default_factory=dict, description="Generator-specific properties (maxBurst, ...)"
    )
    description: str = Field(default="", description="Interface description")

    @field_validator("interface_mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        if isinstance(v, str):
            normalized = v.strip().lower()
            allowed = [m.value for m in BusInterfaceMode]
            if normalized not in allowed:
                raise SchemaShapeError.invalid_value("interface mode", v, allowed)
            return normalized
        return v

    @property
    def role(self) -> InterfaceRole:
        """Role of this interface (master/source -> SOURCE, slave/sink -> SINK)."""
        return _MODE_TO_ROLE[self.interface_mode]

    @property
    def is_sink(self) -> bool:
        return self.role == InterfaceRole.SINK

    @property
    def is_monitor(self) -> bool:
        return self.role == InterfaceRole.MONITOR

    def port_map(self, view: str = DEFAULT_VIEW) -> Dict[str, str]:
        """Port map of the given view, empty when the view is absent."""
        for abstraction in self.abstraction_types:
            if abstraction.view_ref == view:
                return dict(abstraction.port_maps)
        return {}

    def prop(self, name: str, default: Optional[Any] = None) -> Any:
        """Generator property lookup with default."""
        return self.props.get(name, default)
