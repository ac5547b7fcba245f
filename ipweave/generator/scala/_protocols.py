"""Typing protocols for generator mixins."""

from __future__ import annotations
from typing import Any, Dict, Protocol

from jinja2 import Environment

from ipweave.buses.registry import GeneratorRegistry
from ipweave.model.component import Component


class GeneratorHost(Protocol):
    """Protocol for the host class that generator mixins expect."""

    env: Environment
    registry: GeneratorRegistry
    view: str

    def render(self, template_name: str, **context: Any) -> str:
        """Render one template."""
        ...

    def _get_template_context(self, component: Component) -> Dict[str, Any]:
        """Build common template context."""
        ...
