"""Register router generation mixin for ``ScalaGenerator``."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from ._protocols import GeneratorHost

from ipweave.model.component import Component
from ipweave.model.memory_map import MemoryMap
from ipweave.regmap.compiler import (
    CompiledAddressBlock,
    CompiledRegister,
    LayoutEntry,
    Padding,
    compile_memory_map,
)
from ipweave.utils.text import indent_block, scala_string

from ..artifacts import ArtifactTree
from .chisel import REGMAP_IMPORTS, param_assignments, serialize_imports

logger = logging.getLogger(__name__)


def address_block_names(block_name: str) -> Dict[str, str]:
    """Scala names generated for one address block."""
    router = f"{block_name}RegRouter"
    return {
        "router": router,
        "base_object": f"{router}Base",
        "user_object": f"{router}User",
        "io_bundle": f"{block_name}AddressBlockBundle",
        "tl_regmap": f"{block_name}TLRegMap",
        "axi4_regmap": f"{block_name}AXI4RegMap",
    }


def reg_field(entry: LayoutEntry, register: CompiledRegister) -> str:
    """``RegField`` constructor for one layout entry."""
    if isinstance(entry, Padding) or entry.is_reserved:
        return f"RegField({entry.width})"
    desc = "RegFieldDesc({}, {}, reset = Some({}))".format(
        scala_string(entry.declared_name or register.name),
        scala_string(entry.description),
        entry.reset_value,
    )
    target = f"register.{register.name}.{entry.name}"
    return f"{entry.direction.reg_field}({entry.width}, {target}, {desc})"


def reg_field_group(register: CompiledRegister) -> str:
    description = f"Some({scala_string(register.description)})" if register.description else "None"
    entries = ",\n".join(reg_field(entry, register) for entry in register.layout)
    return "{} -> RegFieldGroup({}, {}, Seq(\n{}))".format(
        register.offset_expr,
        scala_string(register.name),
        description,
        indent_block(entries, 2),
    )


class RegmapGenerationMixin:
    """Mixin for register router generation, one router per register block."""

    def regmap_package(self, component: Component) -> str:
        return f"{component.package_name}.regmap"

    def generate_regmap_params(self: GeneratorHost, component: Component) -> str:
        """Generate the parameter case class shared by every register router."""
        context = self._get_template_context(component)
        context["package"] = self.regmap_package(component)
        context["imports"] = serialize_imports(["chisel3._"])
        return self.render("regmap_params.scala.j2", **context)

    def _block_context(
        self: GeneratorHost,
        component: Component,
        memory_map: MemoryMap,
        block: CompiledAddressBlock,
    ) -> Dict[str, Any]:
        context = self._get_template_context(component)
        regmap_package = self.regmap_package(component)
        params = context["params"]
        context.update(
            {
                "package": f"{regmap_package}.{memory_map.name}.{block.name}",
                "imports": serialize_imports(
                    REGMAP_IMPORTS + ["", f"{regmap_package}.{component.name}Params"]
                ),
                "params_class": f"{component.name}Params",
                "param_assigns": param_assignments(params, "params"),
                "param_aliases": [f"val {p.name} = componentParams.{p.name}" for p in params],
                "names": address_block_names(block.name),
                "block": block,
                "device_name": f"{component.name}-{block.name}",
                "mapping": ",\n".join(reg_field_group(r) for r in block.registers),
            }
        )
        return context

    def generate_regmap_block_base(
        self: GeneratorHost,
        component: Component,
        memory_map: MemoryMap,
        block: CompiledAddressBlock,
    ) -> str:
        """Generate the register bundles, reset values and routers of one block."""
        context = self._block_context(component, memory_map, block)
        return self.render("regmap_block_base.scala.j2", **context)

    def generate_regmap_block_user(
        self: GeneratorHost,
        component: Component,
        memory_map: MemoryMap,
        block: CompiledAddressBlock,
    ) -> str:
        """Generate the user-owned reset value overrides of one block."""
        context = self._block_context(component, memory_map, block)
        return self.render("regmap_block_user.scala.j2", **context)

    def generate_regmap(self, component: Component) -> ArtifactTree:
        """
        Register routers for every register block of every memory map.

        Raises:
            StructuralError: If any register layout is invalid.
        """
        base: Dict[str, Any] = {f"{component.name}Params": self.generate_regmap_params(component)}
        user: Dict[str, Any] = {}
        for memory_map in component.memory_maps:
            blocks = compile_memory_map(memory_map)
            if not blocks:
                logger.debug("Memory map %s has no register blocks", memory_map.name)
                continue
            base[memory_map.name] = {
                f"{b.name}-base": self.generate_regmap_block_base(component, memory_map, b)
                for b in blocks
            }
            user[memory_map.name] = {
                b.name: self.generate_regmap_block_user(component, memory_map, b) for b in blocks
            }
            logger.debug(
                "Memory map %s: %d block(s), %d register(s)",
                memory_map.name,
                len(blocks),
                sum(len(b.registers) for b in blocks),
            )
        return ArtifactTree(base={"regmap": base}, user={"regmap": user})
