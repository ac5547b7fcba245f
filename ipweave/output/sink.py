"""
File sink for artifact trees.

Base artifacts are regenerated on every run and always overwritten. User
artifacts are scaffolding: they are written only when no file exists at
their path, so edits made by the user survive regeneration.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from ipweave.config import GenerationOptions
from ipweave.generator.artifacts import ArtifactTree

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Outcome of one write pass."""

    written: List[Path] = field(default_factory=list)
    preserved: List[Path] = field(default_factory=list)


class ArtifactWriter:
    """Writes an artifact tree below one output directory."""

    def __init__(self, output_dir: Union[str, Path], extension: str = ".scala"):
        self.output_dir = Path(output_dir)
        self.extension = extension

    @classmethod
    def from_options(
        cls, output_dir: Union[str, Path], options: GenerationOptions
    ) -> "ArtifactWriter":
        return cls(output_dir, extension=options.file_extension)

    def path_for(self, path: tuple) -> Path:
        """Leaf ``("regmap", "mm", "blk-base")`` -> ``<out>/regmap/mm/blk-base.scala``."""
        *dirs, name = path
        return self.output_dir.joinpath(*dirs, name + self.extension)

    def write(self, tree: ArtifactTree) -> WriteReport:
        report = WriteReport()
        for kind, path, text in tree.iter_leaves():
            target = self.path_for(path)
            if kind == "user" and target.exists():
                logger.warning("Preserving existing user file %s", target)
                report.preserved.append(target)
                continue

            os.makedirs(target.parent, exist_ok=True)
            with open(target, "w", encoding="utf-8") as f:
                f.write(text)
            report.written.append(target)

        logger.info(
            "Wrote %d file(s) to %s, preserved %d user file(s)",
            len(report.written),
            self.output_dir,
            len(report.preserved),
        )
        return report
