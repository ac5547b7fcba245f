"""
Base generator interface for source generation.

Concrete generators render Jinja2 templates from a ``templates``
subdirectory and return their output as an :class:`ArtifactTree`, so the
orchestrator can merge contributions from several generators.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ipweave.model.component import Component
from ipweave.utils.text import indent_block, scala_string

from .artifacts import ArtifactTree


class BaseGenerator(ABC):
    """
    Abstract base class for code generators.

    Subclasses must implement :meth:`generate`.
    """

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize the generator with its Jinja2 environment.

        Args:
            template_dir: Optional custom template directory.
                Defaults to the 'templates' subdirectory next to this module.
        """
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["block"] = indent_block
        self.env.filters["scala_string"] = scala_string

    def render(self, template_name: str, **context: Any) -> str:
        """Render one template with the given context."""
        return self.env.get_template(template_name).render(**context)

    @abstractmethod
    def generate(self, component: Component) -> ArtifactTree:
        """
        Generate every artifact this generator is responsible for.

        Args:
            component: Component description

        Returns:
            Base and user artifact trees
        """
        pass
