"""
Exception taxonomy for the generation engine.

Structural and schema failures raise and abort generation of the affected
component. Missing generator capabilities and unmapped bus signals are not
errors: they are handled where they occur by emitting fallback output.
"""

from typing import Iterable, Optional, Sequence


class GenerationError(Exception):
    """Base class for all errors raised by ipweave."""


class SchemaShapeError(GenerationError, ValueError):
    """Unrecognized enum value or malformed schema node.

    Inherits from ``ValueError`` so that raising it inside a pydantic
    validator is reported as a regular validation failure.
    """

    def __init__(self, message: str, value: object = None, allowed: Iterable[str] = ()):
        self.value = value
        self.allowed = tuple(allowed)
        if self.allowed:
            message = f"{message}, must be one of {list(self.allowed)}"
        super().__init__(message)

    @classmethod
    def invalid_value(cls, kind: str, value: object, allowed: Iterable[str]) -> "SchemaShapeError":
        """Build the standard 'invalid <kind>' error."""
        return cls(f"{value!r} is an invalid {kind}", value=value, allowed=allowed)


class StructuralError(GenerationError):
    """A structural invariant of the register map was violated."""

    def __init__(self, message: str, register: Optional[str] = None):
        self.register = register
        super().__init__(message)


class FieldOverlapError(StructuralError):
    """Two fields of one register share bits."""

    def __init__(self, register: str, first: str, second: str, first_end: int, second_offset: int):
        self.fields: Sequence[str] = (first, second)
        super().__init__(
            f"register '{register}': fields '{first}' (ends at bit {first_end}) and "
            f"'{second}' (starts at bit {second_offset}) are overlapping",
            register=register,
        )


class IncompleteInterfaceError(StructuralError):
    """A protocol adapter requires a signal that the port map does not provide."""

    def __init__(self, interface: str, signal: str, protocol: str):
        self.interface = interface
        self.signal = signal
        super().__init__(
            f"bus interface '{interface}' of type {protocol} must map signal '{signal}'"
        )


class UnsupportedInterfaceError(GenerationError):
    """A generator was asked explicitly for an interface it cannot handle."""


class OutputValidationError(GenerationError):
    """Generated text failed syntax validation."""

    def __init__(self, artifact: str, diagnostic: str):
        self.artifact = artifact
        self.diagnostic = diagnostic
        super().__init__(f"generated artifact '{artifact}' is invalid: {diagnostic}")
