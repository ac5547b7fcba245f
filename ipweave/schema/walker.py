"""
Depth-first traversal over the nested trees used during generation.

Two tree shapes recur: the parameter schema (``ParamNode`` objects) and
plain nested mappings (bus-signal schemas, import lists, artifact trees).
The shape is selected with a ``children`` function that returns the
ordered ``(key, child)`` pairs of a group node, or ``None`` for a leaf.

Visitors receive ``(node, path)`` where ``path`` is the tuple of keys from
the root. ``enter`` runs pre-order on every node, ``leaf`` on leaves only,
``leave`` post-order on every node. Children are visited in declaration
order, so identical trees always produce identical visits.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from ipweave.errors import SchemaShapeError
from ipweave.model.param_schema import ParamNode

Path = Tuple[str, ...]
Visitor = Callable[[Any, Path], Any]
Children = Callable[[Any], Optional[Iterable[Tuple[str, Any]]]]


def param_children(node: Any) -> Optional[Iterable[Tuple[str, Any]]]:
    """Children of a parameter schema node; integer nodes are leaves."""
    if isinstance(node, ParamNode) and not node.is_leaf:
        return node.properties.items()
    return None


def mapping_children(node: Any) -> Optional[Iterable[Tuple[str, Any]]]:
    """Children of a nested mapping; anything that is not a mapping is a leaf."""
    if isinstance(node, Mapping):
        return node.items()
    return None


def walk(
    tree: Any,
    enter: Optional[Visitor] = None,
    leaf: Optional[Visitor] = None,
    leave: Optional[Visitor] = None,
    children: Children = mapping_children,
) -> None:
    """Visit every node of ``tree`` for side effects."""

    def visit(node: Any, path: Path) -> None:
        if enter is not None:
            enter(node, path)
        kids = children(node)
        if kids is None:
            if leaf is not None:
                leaf(node, path)
        else:
            for key, child in kids:
                visit(child, path + (key,))
        if leave is not None:
            leave(node, path)

    visit(tree, ())


def reduce(
    tree: Any,
    enter: Optional[Visitor] = None,
    leaf: Optional[Visitor] = None,
    leave: Optional[Visitor] = None,
    children: Children = mapping_children,
) -> List[Any]:
    """
    Traverse like :func:`walk` and collect visitor results in visit order.

    A visitor returning a list or tuple contributes its items; ``None``
    contributes nothing.
    """
    results: List[Any] = []

    def collect(visitor: Optional[Visitor]) -> Optional[Visitor]:
        if visitor is None:
            return None

        def wrapped(node: Any, path: Path) -> None:
            value = visitor(node, path)
            if value is None:
                return
            if isinstance(value, (list, tuple)):
                results.extend(value)
            else:
                results.append(value)

        return wrapped

    walk(tree, enter=collect(enter), leaf=collect(leaf), leave=collect(leave), children=children)
    return results


@dataclass(frozen=True)
class ParamLeaf:
    """Integer parameter flattened out of the parameter schema."""

    path: Path
    name: str
    default: Optional[int] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None


def flatten_params(schema: Optional[ParamNode]) -> List[ParamLeaf]:
    """
    Flatten a parameter schema into its ordered leaves.

    Every generated parameter list and constructor argument list is built
    from this one sequence, so they always agree on order.

    Raises:
        SchemaShapeError: If two leaves flatten to the same name.
    """
    if schema is None:
        return []

    def to_leaf(node: ParamNode, path: Path) -> ParamLeaf:
        if not path:
            raise SchemaShapeError("parameter schema root must be an object node")
        return ParamLeaf(path=path, name="_".join(path), default=node.default)

    leaves = reduce(schema, leaf=to_leaf, children=param_children)

    seen = {}
    for item in leaves:
        if item.name in seen:
            raise SchemaShapeError(
                f"duplicate parameter name '{item.name}' "
                f"(from {'.'.join(seen[item.name])} and {'.'.join(item.path)})",
                value=item.name,
            )
        seen[item.name] = item.path
    return leaves
