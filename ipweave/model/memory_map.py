"""
Memory map definitions: memory map -> address block -> register -> field.

These are schema models only. Layout checking (padding, overlaps, reset
values) is done by ``ipweave.regmap.compiler`` so that structural errors
carry register and field names.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator

from ipweave.errors import SchemaShapeError
from ipweave.utils import parse_bit_range, parse_int

from .base import FlexibleModel, StrictModel


class AccessType(str, Enum):
    """Closed set of register/field access modes."""

    READ_WRITE = "read-write"
    READ_WRITE_ONCE = "read-writeOnce"
    WRITE_ONLY = "write-only"
    WRITE_ONCE = "writeOnce"
    READ_ONLY = "read-only"

    @classmethod
    def parse(cls, value: Any) -> "AccessType":
        """Parse an access mode.

        Raises:
            SchemaShapeError: If the value is not one of the allowed modes.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise SchemaShapeError.invalid_value(
                "access field value", value, [a.value for a in cls]
            ) from None


def _parse_optional_access(v: Any) -> Any:
    if v is None or isinstance(v, AccessType):
        return v
    return AccessType.parse(v)


class FieldDef(FlexibleModel):
    """
    Bit field within a register.

    ``bits: "[7:4]"`` is accepted as shorthand for offset and width.
    """

    name: Optional[str] = Field(default=None, description="Field name")
    bit_offset: int = Field(..., description="Starting bit position (LSB = 0)")
    bit_width: int = Field(..., description="Number of bits")
    access: Optional[AccessType] = Field(default=None, description="Access override")
    reset_value: Optional[int] = Field(default=None, description="Reset value")
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "desc"),
        description="Field description",
    )

    @model_validator(mode="before")
    @classmethod
    def parse_bits_notation(cls, data: Any) -> Any:
        """Convert ``bits`` notation into explicit offset and width."""
        if not isinstance(data, dict):
            return data
        bits_val = data.get("bits")
        has_offset = "bit_offset" in data or "bitOffset" in data
        has_width = "bit_width" in data or "bitWidth" in data
        if bits_val and not (has_offset and has_width):
            data = dict(data)
            offset, width = parse_bit_range(str(bits_val))
            data["bit_offset"] = offset
            data["bit_width"] = width
        return data

    @field_validator("access", mode="before")
    @classmethod
    def normalize_access(cls, v: Any) -> Any:
        return _parse_optional_access(v)

    @field_validator("bit_offset", "bit_width", "reset_value", mode="before")
    @classmethod
    def parse_numbers(cls, v: Any) -> Any:
        """Accept numeric strings such as ``"0x10"``."""
        return parse_int(v) if isinstance(v, str) else v

    @property
    def bit_range(self) -> str:
        """Bit range as string (e.g. [7:0])."""
        msb = self.bit_offset + self.bit_width - 1
        if msb == self.bit_offset:
            return f"[{self.bit_offset}]"
        return f"[{msb}:{self.bit_offset}]"


class RegisterDef(FlexibleModel):
    """
    Register within an address block.

    A register without fields is treated as one field spanning ``size``.
    """

    name: str = Field(..., description="Register name")
    address_offset: int = Field(..., description="Offset in address units", ge=0)
    size: Optional[int] = Field(default=None, description="Register width in bits", ge=1)
    access: Optional[AccessType] = Field(default=None, description="Default access for fields")
    description: str = Field(default="", description="Register description")
    fields: Optional[List[FieldDef]] = Field(default=None, description="Bit fields")

    @field_validator("access", mode="before")
    @classmethod
    def normalize_access(cls, v: Any) -> Any:
        return _parse_optional_access(v)

    @field_validator("address_offset", "size", mode="before")
    @classmethod
    def parse_numbers(cls, v: Any) -> Any:
        return parse_int(v) if isinstance(v, str) else v

    @property
    def hex_address(self) -> str:
        return hex(self.address_offset)


class BlockUsage(str, Enum):
    """Address block usage type."""

    REGISTERS = "register"
    MEMORY = "memory"
    RESERVED = "reserved"


class AddressBlock(FlexibleModel):
    """Contiguous address block within a memory map."""

    name: str = Field(..., description="Block name")
    base_address: int = Field(default=0, description="Block starting address", ge=0)
    range: Optional[int] = Field(default=None, description="Block size in address units")
    width: Optional[int] = Field(default=None, description="Default register width in bits")
    usage: BlockUsage = Field(default=BlockUsage.REGISTERS, description="Block usage type")
    access: Optional[AccessType] = Field(default=None, description="Default access")
    description: str = Field(default="", description="Block description")
    registers: List[RegisterDef] = Field(default_factory=list, description="Registers")

    @field_validator("access", mode="before")
    @classmethod
    def normalize_access(cls, v: Any) -> Any:
        return _parse_optional_access(v)

    @field_validator("base_address", "range", "width", mode="before")
    @classmethod
    def parse_numbers(cls, v: Any) -> Any:
        return parse_int(v) if isinstance(v, str) else v

    @property
    def is_register_block(self) -> bool:
        return self.usage == BlockUsage.REGISTERS


class MemoryMap(StrictModel):
    """Memory map of a component."""

    name: str = Field(..., description="Memory map name")
    description: str = Field(default="", description="Memory map description")
    address_unit_bits: int = Field(default=8, description="Bits per address unit", ge=1)
    address_blocks: List[AddressBlock] = Field(default_factory=list, description="Address blocks")

    @property
    def total_registers(self) -> int:
        return sum(len(block.registers) for block in self.address_blocks)
