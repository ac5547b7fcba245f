"""
Parsers for component description formats.
"""

from .yaml import ComponentLoader, ParseError

__all__ = ["ComponentLoader", "ParseError"]
