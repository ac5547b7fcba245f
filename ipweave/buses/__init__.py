"""
Bus protocol tables and the generator registry.
"""

from .base import (
    BusProtocol,
    Capability,
    InterfaceContext,
    MonitorDescriptor,
    RoleGenerators,
    default_signal_name,
)
from .registry import GeneratorRegistry, build_default_registry

__all__ = [
    "BusProtocol",
    "Capability",
    "InterfaceContext",
    "MonitorDescriptor",
    "RoleGenerators",
    "default_signal_name",
    "GeneratorRegistry",
    "build_default_registry",
]
