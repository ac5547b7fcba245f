"""Component model - the canonical representation of one IP block."""

from typing import Any, Dict, List, Optional, Sequence, TypeVar

from pydantic import Field, field_validator, model_validator

from .base import VLNV, StrictModel
from .bus import BusInterface, InterfaceRole
from .memory_map import MemoryMap
from .param_schema import ParamNode
from .port import Port

NamedItem = TypeVar("NamedItem")


class Component(StrictModel):
    """
    Complete description of one hardware IP block.

    This is the model all loaders produce and all generators consume:
    - identity (vendor, library, name, version)
    - physical ports
    - bus interfaces and their port maps
    - memory maps
    - the integer parameter schema
    """

    name: str = Field(..., description="Component name, used for Scala class names")
    vendor: str = Field(default="", description="Vendor identifier")
    library: str = Field(default="", description="Library name")
    version: str = Field(default="", description="Version string")
    description: str = Field(default="", description="Component description")

    ports: List[Port] = Field(default_factory=list, description="Physical ports")
    bus_interfaces: List[BusInterface] = Field(
        default_factory=list, description="Bus interface definitions"
    )
    memory_maps: List[MemoryMap] = Field(default_factory=list, description="Memory maps")
    p_schema: Optional[ParamNode] = Field(default=None, description="Parameter schema")

    @model_validator(mode="before")
    @classmethod
    def lift_model_ports(cls, data: Any) -> Any:
        """Accept ``model: {ports: [...]}`` as written by description tools."""
        if isinstance(data, dict) and "model" in data:
            data = dict(data)
            model = data.pop("model") or {}
            if "ports" in model and "ports" not in data:
                data["ports"] = model["ports"]
        return data

    @field_validator("p_schema", mode="before")
    @classmethod
    def empty_schema_is_none(cls, v: Any) -> Any:
        if isinstance(v, dict) and not v:
            return None
        return v

    @field_validator("version", mode="before")
    @classmethod
    def stringify_version(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Component name cannot be empty")
        return v

    # --- Convenience accessors ---

    @staticmethod
    def _find_by_name(items: Sequence[NamedItem], name: str) -> Optional[NamedItem]:
        """Return the first item with a matching ``name`` attribute."""
        return next((item for item in items if getattr(item, "name", None) == name), None)

    @property
    def vlnv(self) -> VLNV:
        return VLNV(vendor=self.vendor, library=self.library, name=self.name, version=self.version)

    @property
    def package_name(self) -> str:
        """Scala package of the generated sources."""
        return ".".join(part for part in (self.vendor, self.library, self.name) if part)

    def get_port(self, name: str) -> Optional[Port]:
        return self._find_by_name(self.ports, name)

    def get_bus_interface(self, name: str) -> Optional[BusInterface]:
        return self._find_by_name(self.bus_interfaces, name)

    def get_memory_map(self, name: str) -> Optional[MemoryMap]:
        return self._find_by_name(self.memory_maps, name)

    @property
    def ports_by_name(self) -> Dict[str, Port]:
        return {port.name: port for port in self.ports}

    def interfaces_with_role(self, role: InterfaceRole) -> List[BusInterface]:
        return [bus for bus in self.bus_interfaces if bus.role == role]

    @property
    def monitor_interfaces(self) -> List[BusInterface]:
        return [bus for bus in self.bus_interfaces if bus.is_monitor]

    @property
    def total_registers(self) -> int:
        return sum(mm.total_registers for mm in self.memory_maps)
