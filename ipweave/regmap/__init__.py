"""Register map compilation."""

from .compiler import (
    CompiledAddressBlock,
    CompiledField,
    CompiledRegister,
    FieldDirection,
    Padding,
    access_direction,
    compile_address_block,
    compile_memory_map,
    compile_register,
)

__all__ = [
    "CompiledAddressBlock",
    "CompiledField",
    "CompiledRegister",
    "FieldDirection",
    "Padding",
    "access_direction",
    "compile_address_block",
    "compile_memory_map",
    "compile_register",
]
