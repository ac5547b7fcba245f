"""
Register map compiler.

Turns an address block into per-register bit layouts that tile each
register exactly: value fields in offset order with padding inserted into
every gap. Overlapping fields, fields past the register size and reset
values that do not fit their field are structural errors; nothing is
reordered or truncated silently.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union

from ipweave.errors import FieldOverlapError, StructuralError
from ipweave.model.memory_map import AccessType, AddressBlock, FieldDef, MemoryMap, RegisterDef

logger = logging.getLogger(__name__)


class FieldDirection(str, Enum):
    """Who drives a field, seen from the register block."""

    BIDIRECTIONAL = "bidirectional"  # software writes, hardware reads back
    TO_HARDWARE = "to_hardware"
    FROM_HARDWARE = "from_hardware"

    @property
    def bundle_direction(self) -> str:
        return "Input" if self == FieldDirection.FROM_HARDWARE else "Output"

    @property
    def reg_field(self) -> str:
        return _REG_FIELD_CONSTRUCTORS[self]


_REG_FIELD_CONSTRUCTORS = {
    FieldDirection.BIDIRECTIONAL: "RegField",
    FieldDirection.TO_HARDWARE: "RegField.w",
    FieldDirection.FROM_HARDWARE: "RegField.r",
}

_ACCESS_DIRECTIONS = {
    AccessType.READ_WRITE: FieldDirection.BIDIRECTIONAL,
    AccessType.READ_WRITE_ONCE: FieldDirection.BIDIRECTIONAL,
    AccessType.WRITE_ONLY: FieldDirection.TO_HARDWARE,
    AccessType.WRITE_ONCE: FieldDirection.TO_HARDWARE,
    AccessType.READ_ONLY: FieldDirection.FROM_HARDWARE,
}


def access_direction(access: Union[AccessType, str]) -> FieldDirection:
    """
    Raises:
        SchemaShapeError: If ``access`` is not one of the access modes.
    """
    return _ACCESS_DIRECTIONS[AccessType.parse(access)]


@dataclass(frozen=True)
class CompiledField:
    """
    One field of a compiled register.

    A field without any access mode in its hierarchy is a reserved range:
    it occupies bits but has no bundle signal and no reset value.
    """

    name: str
    offset: int
    width: int
    access: Optional[AccessType] = None
    reset_value: int = 0
    description: str = ""
    declared_name: Optional[str] = None

    @property
    def is_reserved(self) -> bool:
        return self.access is None

    @property
    def direction(self) -> Optional[FieldDirection]:
        return None if self.access is None else _ACCESS_DIRECTIONS[self.access]

    @property
    def end(self) -> int:
        return self.offset + self.width


@dataclass(frozen=True)
class Padding:
    """Unnamed gap between fields."""

    offset: int
    width: int

    @property
    def end(self) -> int:
        return self.offset + self.width


LayoutEntry = Union[CompiledField, Padding]


@dataclass(frozen=True)
class CompiledRegister:
    name: str
    address_offset: int
    byte_offset: int
    offset_expr: str
    size: int
    layout: Tuple[LayoutEntry, ...]
    description: str = ""

    @property
    def fields(self) -> List[CompiledField]:
        """All fields in offset order, reserved ranges included."""
        return [e for e in self.layout if isinstance(e, CompiledField)]

    @property
    def value_fields(self) -> List[CompiledField]:
        """Fields that carry a value between software and hardware."""
        return [f for f in self.fields if not f.is_reserved]


@dataclass(frozen=True)
class CompiledAddressBlock:
    name: str
    base_address: int
    address_unit_bits: int
    registers: Tuple[CompiledRegister, ...]
    reset_values: Mapping[str, Mapping[str, int]] = field(default_factory=dict)
    description: str = ""


def address_unit_bytes(address_unit_bits: int) -> int:
    """
    Raises:
        StructuralError: If the address unit is not a whole number of bytes.
    """
    if address_unit_bits <= 0 or address_unit_bits % 8 != 0:
        raise StructuralError(
            f"addressUnitBits must be a positive multiple of 8, got {address_unit_bits}"
        )
    return address_unit_bits // 8


def _register_fields(register: RegisterDef, size: Optional[int]) -> List[FieldDef]:
    if register.fields:
        return list(register.fields)
    if size is None:
        raise StructuralError(
            f"register '{register.name}' has neither fields nor a size", register=register.name
        )
    return [FieldDef(bit_offset=0, bit_width=size)]


def _compile_field(
    register: RegisterDef, field_def: FieldDef, index: int, inherited: Optional[AccessType]
) -> CompiledField:
    name = field_def.name or f"reserved{index}"
    if field_def.bit_width < 1:
        raise StructuralError(
            f"register '{register.name}': field '{name}' has width {field_def.bit_width}",
            register=register.name,
        )
    if field_def.bit_offset < 0:
        raise StructuralError(
            f"register '{register.name}': field '{name}' has a negative offset "
            f"({field_def.bit_offset})",
            register=register.name,
        )

    access = field_def.access or inherited
    if access is None:
        return CompiledField(
            name=name,
            offset=field_def.bit_offset,
            width=field_def.bit_width,
            description=field_def.description,
            declared_name=field_def.name,
        )

    reset_value = field_def.reset_value if field_def.reset_value is not None else 0
    if reset_value < 0 or reset_value >= (1 << field_def.bit_width):
        raise StructuralError(
            f"register '{register.name}': reset value {reset_value:#x} of field '{name}' "
            f"does not fit in {field_def.bit_width} bit(s)",
            register=register.name,
        )
    return CompiledField(
        name=name,
        offset=field_def.bit_offset,
        width=field_def.bit_width,
        access=access,
        reset_value=reset_value,
        description=field_def.description,
        declared_name=field_def.name,
    )


def layout_fields(
    register_name: str, fields: List[CompiledField], size: int
) -> Tuple[LayoutEntry, ...]:
    """
    Order fields by offset and pad every gap up to ``size``.

    Raises:
        FieldOverlapError: If two fields share bits.
        StructuralError: If a field extends past ``size``.
    """
    layout: List[LayoutEntry] = []
    previous: Optional[CompiledField] = None
    position = 0
    for current in sorted(fields, key=lambda f: f.offset):
        if previous is not None and current.offset < previous.end:
            raise FieldOverlapError(
                register_name, previous.name, current.name, previous.end - 1, current.offset
            )
        gap = current.offset - position
        if gap > 0:
            layout.append(Padding(offset=position, width=gap))
        layout.append(current)
        position = current.end
        previous = current

    if position > size:
        raise StructuralError(
            f"register '{register_name}': field '{previous.name}' ends at bit {position - 1}, "
            f"past the register size of {size} bits",
            register=register_name,
        )
    if position < size:
        layout.append(Padding(offset=position, width=size - position))
    return tuple(layout)


def compile_register(
    register: RegisterDef,
    address_unit_bits: int = 8,
    block_access: Optional[AccessType] = None,
    block_width: Optional[int] = None,
) -> CompiledRegister:
    """Compile one register; access is inherited field -> register -> block."""
    unit_bytes = address_unit_bytes(address_unit_bits)
    declared_size = register.size or block_width
    field_defs = _register_fields(register, declared_size)
    inherited = register.access or block_access

    fields = [_compile_field(register, f, i, inherited) for i, f in enumerate(field_defs)]

    seen = set()
    for f in fields:
        if f.name in seen:
            raise StructuralError(
                f"register '{register.name}': duplicate field name '{f.name}'",
                register=register.name,
            )
        seen.add(f.name)

    size = declared_size if declared_size is not None else max(f.end for f in fields)
    layout = layout_fields(register.name, fields, size)

    if address_unit_bits == 8:
        offset_expr = str(register.address_offset)
    else:
        offset_expr = f"{register.address_offset} * {unit_bytes}"

    logger.debug(
        "Compiled register %s at %s: %d field(s), %d padding gap(s)",
        register.name,
        offset_expr,
        len(fields),
        sum(1 for e in layout if isinstance(e, Padding)),
    )
    return CompiledRegister(
        name=register.name,
        address_offset=register.address_offset,
        byte_offset=register.address_offset * unit_bytes,
        offset_expr=offset_expr,
        size=size,
        layout=layout,
        description=register.description,
    )


def compile_address_block(block: AddressBlock, address_unit_bits: int = 8) -> CompiledAddressBlock:
    """
    Compile every register of a block, in declaration order.

    Raises:
        StructuralError: On any layout violation or duplicate register name.
    """
    address_unit_bytes(address_unit_bits)

    registers = []
    reset_values: Dict[str, Dict[str, int]] = {}
    for register in block.registers:
        if register.name in reset_values:
            raise StructuralError(
                f"address block '{block.name}': duplicate register name '{register.name}'",
                register=register.name,
            )
        compiled = compile_register(register, address_unit_bits, block.access, block.width)
        registers.append(compiled)
        reset_values[register.name] = {f.name: f.reset_value for f in compiled.value_fields}

    return CompiledAddressBlock(
        name=block.name,
        base_address=block.base_address,
        address_unit_bits=address_unit_bits,
        registers=tuple(registers),
        reset_values=reset_values,
        description=block.description,
    )


def compile_memory_map(memory_map: MemoryMap) -> List[CompiledAddressBlock]:
    """Compile the register blocks of a memory map; other usages are skipped."""
    compiled = []
    for block in memory_map.address_blocks:
        if not block.is_register_block:
            logger.debug(
                "Skipping address block %s of %s (usage: %s)",
                block.name,
                memory_map.name,
                block.usage.value,
            )
            continue
        compiled.append(compile_address_block(block, memory_map.address_unit_bits))
    return compiled
