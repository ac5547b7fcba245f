"""Passive bus monitor generation mixin for ``ScalaGenerator``."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from ._protocols import GeneratorHost

from ipweave.buses.base import InterfaceContext, MonitorDescriptor
from ipweave.errors import UnsupportedInterfaceError
from ipweave.model.bus import BusInterface
from ipweave.model.component import Component
from ipweave.model.port import PortDirection

from .chisel import param_assignments, serialize_imports
from .fragments import Comment, Connect, Fragment
from .wiring import check_port_map, flatten_signals

logger = logging.getLogger(__name__)


class MonitorGenerationMixin:
    """Mixin for bus monitors wrapping the component's black box."""

    def monitor_target(
        self: GeneratorHost, component: Component
    ) -> Optional[Tuple[BusInterface, MonitorDescriptor]]:
        """
        The monitored interface and its descriptor, or ``None``.

        A monitor is generated only for a component with exactly one monitor
        interface whose protocol provides a monitor descriptor.
        """
        interfaces = component.monitor_interfaces
        if len(interfaces) != 1:
            return None
        descriptor = self.registry.monitor_descriptor(interfaces[0].bus_type.name)
        if descriptor is None:
            return None
        return interfaces[0], descriptor

    def _require_monitor_target(
        self, component: Component
    ) -> Tuple[BusInterface, MonitorDescriptor]:
        target = self.monitor_target(component)
        if target is None:
            found = [f"{b.name} ({b.bus_type.name})" for b in component.monitor_interfaces]
            raise UnsupportedInterfaceError(
                f"component '{component.name}' needs exactly one monitor interface of a "
                f"protocol with monitor support, found {found or 'none'}"
            )
        return target

    def _monitor_connects(
        self: GeneratorHost, component: Component, interface: BusInterface
    ) -> List[Fragment]:
        check_port_map(component, interface, self.view)
        ctx = InterfaceContext(component=component, interface=interface, view=self.view)
        protocol = self.registry.protocol(interface.bus_type.name)
        fragments: List[Fragment] = []
        for path, _, reserved in flatten_signals(protocol):
            if reserved:
                continue
            abstract = protocol.signal_name(path)
            port = ctx.port(abstract)
            if port is None:
                continue
            if port.direction == PortDirection.IN:
                fragments.append(
                    Connect(sink=f"blackbox.io.{port.name}", source=f"bundle.{'.'.join(path)}")
                )
            else:
                fragments.append(Comment(f"{abstract}: {port.name} is not a monitor input"))
        return fragments

    def _monitor_context(self: GeneratorHost, component: Component) -> Dict[str, Any]:
        interface, descriptor = self._require_monitor_target(component)
        context = self._get_template_context(component)
        context.update(
            {
                "descriptor": descriptor,
                "monitor_imports": serialize_imports(["chisel3._"] + list(descriptor.imports)),
                "connects": self._monitor_connects(component, interface),
                "blackbox_args": param_assignments(context["params"], "blackboxParams"),
            }
        )
        return context

    def generate_monitor_base(self: GeneratorHost, component: Component) -> str:
        """
        Generate the abstract monitor that instantiates and connects the black box.

        Raises:
            UnsupportedInterfaceError: If the component has no single monitor
                interface with monitor support.
        """
        return self.render("monitor_base.scala.j2", **self._monitor_context(component))

    def generate_monitor_user(self: GeneratorHost, component: Component) -> str:
        """Generate the user-owned monitor subclass."""
        return self.render("monitor_user.scala.j2", **self._monitor_context(component))
