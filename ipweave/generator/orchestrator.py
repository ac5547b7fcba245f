"""
Generation orchestrator.

Drives one component through the Scala generator and returns its base and
user artifact trees, optionally syntax-checking every artifact.
"""

import logging
from typing import Optional

from ipweave.buses.registry import GeneratorRegistry
from ipweave.config import GenerationOptions
from ipweave.errors import OutputValidationError
from ipweave.model.component import Component
from ipweave.model.validators import ComponentValidator
from ipweave.output.validator import ScalaSyntaxValidator, SourceValidator

from .artifacts import ArtifactTree
from .scala.scala_generator import ScalaGenerator

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """
    Produces the artifact trees of a component.

    Args:
        registry: Bus generator registry, built once per process
        options: Generation options; defaults when omitted
        validator: Syntax validator; when omitted, ``options.validate_output``
            enables the built-in Scala validator
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        options: Optional[GenerationOptions] = None,
        validator: Optional[SourceValidator] = None,
    ):
        self.registry = registry
        self.options = options or GenerationOptions()
        if validator is None and self.options.validate_output:
            validator = ScalaSyntaxValidator()
        self.validator = validator
        self.generator = ScalaGenerator(
            registry,
            view=self.options.rtl_view,
            include_regmap=self.options.include_regmap,
            include_monitor=self.options.include_monitor,
        )

    def generate(self, component: Component) -> ArtifactTree:
        """
        Generate every artifact of ``component``.

        Raises:
            SchemaShapeError: On a malformed schema or port map
            StructuralError: On an invalid register layout or incomplete interface
            OutputValidationError: If validation is enabled and an artifact fails it
        """
        logger.info(
            "Generating %s (%s)",
            component.name,
            self.generator.interface_summary(component) or "no bus interfaces",
        )
        checker = ComponentValidator(component, self.registry, view=self.options.rtl_view)
        checker.validate_all()
        for issue in checker.errors + checker.warnings:
            logger.warning("%s: %s (%s)", component.name, issue.message, issue.location)

        tree = self.generator.generate(component)

        leaves = list(tree.iter_leaves())
        if self.validator is not None:
            for kind, path, text in leaves:
                diagnostic = self.validator.validate(text)
                if diagnostic is not None:
                    raise OutputValidationError(f"{kind}/{'/'.join(path)}", diagnostic)

        logger.info(
            "Generated %d base and %d user artifact(s) for %s",
            sum(1 for kind, _, _ in leaves if kind == "base"),
            sum(1 for kind, _, _ in leaves if kind == "user"),
            component.name,
        )
        return tree
