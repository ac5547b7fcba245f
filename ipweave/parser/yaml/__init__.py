"""
YAML loader for component descriptions.
"""

from .component_parser import ComponentLoader
from .errors import ParseError

__all__ = ["ComponentLoader", "ParseError"]
