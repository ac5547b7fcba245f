"""
Semantic validation of component descriptions.

Runs checks beyond what the pydantic models enforce: unique names,
port-map references and register placement. Generation does not require
a clean report; this is a review aid for description authors.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

from .component import Component
from .memory_map import AddressBlock, RegisterDef

if TYPE_CHECKING:
    from ipweave.buses.registry import GeneratorRegistry


@dataclass
class ValidationIssue:
    """Validation finding with context."""

    severity: str  # 'error' or 'warning'
    message: str
    location: str  # e.g. 'register:CTRL', 'bus:S_AXI'
    suggestion: str = ""


class ComponentValidator:
    """
    Component description validator.

    Performs semantic validation beyond what pydantic provides.
    """

    def __init__(
        self,
        component: Component,
        registry: Optional["GeneratorRegistry"] = None,
        view: str = "RTLview",
    ):
        self.component = component
        self.registry = registry
        self.view = view
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def validate_all(self) -> bool:
        """
        Run all validation checks.

        Returns:
            True if no errors (warnings are allowed)
        """
        self.errors.clear()
        self.warnings.clear()

        self.validate_unique_names()
        self.validate_port_maps()
        self.validate_protocols()
        self.validate_memory_maps()

        return len(self.errors) == 0

    def validate_unique_names(self) -> None:
        """Check for duplicate names within each category."""
        self._check_duplicates([p.name for p in self.component.ports], "port")
        self._check_duplicates([b.name for b in self.component.bus_interfaces], "bus_interface")
        self._check_duplicates([m.name for m in self.component.memory_maps], "memory_map")

    def _check_duplicates(self, names: List[str], category: str) -> None:
        seen: Set[str] = set()
        for name in names:
            if name in seen:
                self.errors.append(
                    ValidationIssue(
                        severity="error",
                        message=f"Duplicate {category} name: '{name}'",
                        location=f"{category}:{name}",
                        suggestion=f"Rename one of the {category}s with name '{name}'",
                    )
                )
            seen.add(name)

    def validate_port_maps(self) -> None:
        """Port maps must reference declared ports, each port at most once per view."""
        ports = self.component.ports_by_name
        owners: Dict[str, Tuple[str, str]] = {}

        for bus in self.component.bus_interfaces:
            for abstract, physical in bus.port_map(self.view).items():
                location = f"bus:{bus.name}"
                if physical not in ports:
                    self.errors.append(
                        ValidationIssue(
                            severity="error",
                            message=f"Signal '{abstract}' maps to unknown port '{physical}'",
                            location=location,
                        )
                    )
                    continue
                if physical in owners:
                    other_bus, other_signal = owners[physical]
                    self.errors.append(
                        ValidationIssue(
                            severity="error",
                            message=(
                                f"Port '{physical}' is mapped by '{other_bus}.{other_signal}' "
                                f"and '{bus.name}.{abstract}'"
                            ),
                            location=location,
                            suggestion="Map each physical port from one bus signal only",
                        )
                    )
                    continue
                owners[physical] = (bus.name, abstract)

            if not bus.port_map(self.view):
                self.warnings.append(
                    ValidationIssue(
                        severity="warning",
                        message=f"Bus interface '{bus.name}' has no '{self.view}' port map",
                        location=f"bus:{bus.name}",
                    )
                )

    def validate_protocols(self) -> None:
        """Warn about bus protocols the registry has no generators for."""
        if self.registry is None:
            return
        for bus in self.component.bus_interfaces:
            if self.registry.protocol(bus.bus_type.name) is None:
                self.warnings.append(
                    ValidationIssue(
                        severity="warning",
                        message=(
                            f"Bus interface '{bus.name}' uses unsupported protocol "
                            f"'{bus.bus_type.name}'; generic bridging will be generated"
                        ),
                        location=f"bus:{bus.name}",
                    )
                )

    def validate_memory_maps(self) -> None:
        for mm in self.component.memory_maps:
            unit_bytes = max(mm.address_unit_bits // 8, 1)
            for block in mm.address_blocks:
                self._validate_address_block(mm.name, block, unit_bytes)

    def _validate_address_block(self, mm_name: str, block: AddressBlock, unit_bytes: int) -> None:
        location = f"memory_map:{mm_name}:block:{block.name}"
        for i, reg1 in enumerate(block.registers):
            for reg2 in block.registers[i + 1 :]:
                if self._registers_overlap(reg1, reg2, block, unit_bytes):
                    self.errors.append(
                        ValidationIssue(
                            severity="error",
                            message=f"Overlapping registers: '{reg1.name}' at {reg1.hex_address} "
                            f"and '{reg2.name}' at {reg2.hex_address}",
                            location=location,
                        )
                    )

            size = reg1.size or block.width
            if size and size % 8 == 0:
                alignment = size // 8
                byte_offset = reg1.address_offset * unit_bytes
                if byte_offset % alignment != 0:
                    self.warnings.append(
                        ValidationIssue(
                            severity="warning",
                            message=f"Register '{reg1.name}' not aligned to {alignment}-byte "
                            f"boundary (offset: 0x{byte_offset:X})",
                            location=f"{location}:register:{reg1.name}",
                        )
                    )

    @staticmethod
    def _registers_overlap(
        reg1: RegisterDef, reg2: RegisterDef, block: AddressBlock, unit_bytes: int
    ) -> bool:
        size1 = reg1.size or block.width
        size2 = reg2.size or block.width
        if not size1 or not size2:
            return False
        start1 = reg1.address_offset * unit_bytes
        start2 = reg2.address_offset * unit_bytes
        end1 = start1 + max(size1 // 8, 1)
        end2 = start2 + max(size2 // 8, 1)
        return not (end1 <= start2 or end2 <= start1)

    def get_error_summary(self) -> str:
        """Get human-readable error summary."""
        lines = []

        if self.errors:
            lines.append(f"\n{len(self.errors)} Error(s):")
            for err in self.errors:
                lines.append(f"  [{err.severity.upper()}] {err.location}: {err.message}")
                if err.suggestion:
                    lines.append(f"           -> {err.suggestion}")

        if self.warnings:
            lines.append(f"\n{len(self.warnings)} Warning(s):")
            for warn in self.warnings:
                lines.append(f"  [{warn.severity.upper()}] {warn.location}: {warn.message}")
                if warn.suggestion:
                    lines.append(f"           -> {warn.suggestion}")

        if not self.errors and not self.warnings:
            lines.append("\nAll validation checks passed")

        return "\n".join(lines)


def validate_component(
    component: Component, registry: Optional["GeneratorRegistry"] = None
) -> Tuple[bool, List[ValidationIssue], List[ValidationIssue]]:
    """
    Convenience function to validate a component.

    Returns:
        Tuple of (is_valid, errors, warnings)
    """
    validator = ComponentValidator(component, registry)
    is_valid = validator.validate_all()
    return is_valid, validator.errors, validator.warnings
