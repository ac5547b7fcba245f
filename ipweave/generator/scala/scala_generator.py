"""
Scala generator for rocket-chip block wrappers.

Generates, for one component:
- the black box wrapper and its diplomatic lazy module, top and config
  (base) plus the user scaffolding subclasses
- register routers for every register block, via RegmapGenerationMixin
- a passive bus monitor, via MonitorGenerationMixin
"""

import logging
import os
from typing import Any, Dict, Optional

from ipweave.buses.registry import GeneratorRegistry
from ipweave.model.bus import DEFAULT_VIEW
from ipweave.model.component import Component
from ipweave.schema.walker import flatten_params

from ..artifacts import ArtifactTree
from ..base_generator import BaseGenerator
from .chisel import WRAPPER_IMPORTS, param_declarations, param_fields, serialize_imports
from .monitor_generator import MonitorGenerationMixin
from .regmap_generator import RegmapGenerationMixin
from .wrapper_generator import WrapperGenerationMixin

logger = logging.getLogger(__name__)


class ScalaGenerator(
    BaseGenerator, WrapperGenerationMixin, RegmapGenerationMixin, MonitorGenerationMixin
):
    """Chisel/Scala generator for one component at a time.

    Stateless between calls: the registry and options are fixed at
    construction and every ``generate`` call starts from the component.
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        view: str = DEFAULT_VIEW,
        include_regmap: bool = True,
        include_monitor: bool = True,
        template_dir: Optional[str] = None,
    ):
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")
        super().__init__(template_dir)
        self.registry = registry
        self.view = view
        self.include_regmap = include_regmap
        self.include_monitor = include_monitor

    def _get_template_context(self, component: Component) -> Dict[str, Any]:
        """Context shared by every template: identity and flattened parameters."""
        params = flatten_params(component.p_schema)
        return {
            "name": component.name,
            "package": component.package_name,
            "vendor": component.vendor,
            "version": component.version,
            "description": component.description,
            "compat": f"{component.vendor},{component.name}-{component.version}",
            "imports": serialize_imports(WRAPPER_IMPORTS),
            "params": params,
            "param_names": [p.name for p in params],
            "param_decls": param_declarations(params),
            "param_fields": param_fields(params),
        }

    def generate_wrapper(self, component: Component) -> ArtifactTree:
        return ArtifactTree(
            base={f"{component.name}-base": self.generate_wrapper_base(component)},
            user={component.name: self.generate_wrapper_user(component)},
        )

    def generate_monitor(self, component: Component) -> ArtifactTree:
        """
        Raises:
            UnsupportedInterfaceError: If the component cannot have a monitor.
        """
        return ArtifactTree(
            base={f"{component.name}Monitor-base": self.generate_monitor_base(component)},
            user={f"{component.name}Monitor": self.generate_monitor_user(component)},
        )

    def generate(self, component: Component) -> ArtifactTree:
        """Generate every artifact enabled for this generator."""
        tree = self.generate_wrapper(component)

        if self.include_regmap:
            tree.merge(self.generate_regmap(component))

        if self.include_monitor:
            if self.monitor_target(component) is not None:
                tree.merge(self.generate_monitor(component))
            elif component.monitor_interfaces:
                logger.warning(
                    "Skipping monitor for %s: needs exactly one monitor interface of a "
                    "protocol with monitor support, found %s",
                    component.name,
                    [b.bus_type.name for b in component.monitor_interfaces],
                )
        return tree
