"""Schema tree traversal and bus-signal encoding helpers."""

from .polarity import Direction, Polarity, SignalSpec, effective_direction, resolve
from .walker import (
    ParamLeaf,
    flatten_params,
    mapping_children,
    param_children,
    reduce,
    walk,
)

__all__ = [
    "walk",
    "reduce",
    "param_children",
    "mapping_children",
    "flatten_params",
    "ParamLeaf",
    "Direction",
    "Polarity",
    "SignalSpec",
    "effective_direction",
    "resolve",
]
