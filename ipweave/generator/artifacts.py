"""
Artifact trees: nested mappings from artifact names to generated text.

``base`` artifacts are regenerated on every run; ``user`` artifacts are
scaffolding written once and then owned by the user.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from ipweave.schema.walker import mapping_children, reduce

ArtifactPath = Tuple[str, ...]


def _merge(target: Dict[str, Any], source: Dict[str, Any], trail: ArtifactPath = ()) -> None:
    for key, value in source.items():
        path = trail + (key,)
        if key not in target:
            target[key] = value
        elif isinstance(target[key], dict) and isinstance(value, dict):
            _merge(target[key], value, path)
        else:
            raise ValueError(f"artifact '{'/'.join(path)}' is generated twice")


def leaves(tree: Dict[str, Any]) -> List[Tuple[ArtifactPath, str]]:
    """Text leaves of a tree as ``(path, text)`` pairs, in insertion order."""
    return reduce(tree, leaf=lambda text, path: [(path, text)], children=mapping_children)


@dataclass
class ArtifactTree:
    """Generated output of one component."""

    base: Dict[str, Any] = field(default_factory=dict)
    user: Dict[str, Any] = field(default_factory=dict)

    def merge(self, other: "ArtifactTree") -> "ArtifactTree":
        """
        Merge ``other`` into this tree in place.

        Raises:
            ValueError: If both trees define the same artifact.
        """
        _merge(self.base, other.base)
        _merge(self.user, other.user)
        return self

    def iter_leaves(self) -> Iterator[Tuple[str, ArtifactPath, str]]:
        """Yield ``(kind, path, text)`` for every base leaf, then every user leaf."""
        for path, text in leaves(self.base):
            yield "base", path, text
        for path, text in leaves(self.user):
            yield "user", path, text
