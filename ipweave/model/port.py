"""
Physical port definitions.
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator, model_validator

from ipweave.errors import SchemaShapeError

from .base import StrictModel


class PortDirection(str, Enum):
    """Port direction enumeration."""

    IN = "in"
    OUT = "out"
    INOUT = "inout"

    @classmethod
    def from_string(cls, value: str) -> "PortDirection":
        """Normalize common direction aliases into ``PortDirection``.

        Raises:
            SchemaShapeError: If the value is not a known direction.
        """
        normalized = value.lower().strip()
        mapping = {
            "in": cls.IN,
            "input": cls.IN,
            "out": cls.OUT,
            "output": cls.OUT,
            "inout": cls.INOUT,
            "bidir": cls.INOUT,
            "analog": cls.INOUT,
        }
        if normalized not in mapping:
            raise SchemaShapeError.invalid_value(
                "port direction", value, [d.value for d in cls]
            )
        return mapping[normalized]

    @property
    def chisel(self) -> str:
        """Chisel direction constructor; ``inout`` resolves to ``Analog``."""
        return _CHISEL_DIRECTIONS[self]


_CHISEL_DIRECTIONS = {
    PortDirection.IN: "Input",
    PortDirection.OUT: "Output",
    PortDirection.INOUT: "Analog",
}


class Port(StrictModel):
    """
    Physical port of a component.

    Accepts both the flat ``{name, direction, width}`` form and the nested
    ``{name, wire: {direction, width}}`` form of component descriptions.
    """

    name: str = Field(..., description="Physical port name")
    direction: PortDirection = Field(..., description="Port direction")
    width: int = Field(default=1, description="Port width in bits", ge=1)
    description: str = Field(default="", description="Port description")

    @model_validator(mode="before")
    @classmethod
    def lift_wire(cls, data: Any) -> Any:
        """Flatten the ``wire`` sub-object into direction and width."""
        if isinstance(data, dict) and isinstance(data.get("wire"), dict):
            data = dict(data)
            wire = data.pop("wire")
            data.setdefault("direction", wire.get("direction"))
            if "width" in wire:
                data.setdefault("width", wire["width"])
        return data

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Any:
        """Validate and normalize port direction."""
        if isinstance(v, str):
            return PortDirection.from_string(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Port name cannot be empty")
        return v
