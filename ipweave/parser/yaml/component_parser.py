"""
YAML/JSON loader for component descriptions.

Loads a description file and converts it to the canonical ``Component``
model. Both a bare component mapping and a ``component:`` wrapper are
accepted; JSON is read through the same YAML loader.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ipweave.errors import SchemaShapeError
from ipweave.model import Component
from ipweave.utils import filter_none

from .errors import ParseError

logger = logging.getLogger(__name__)


def _schema_shape_error(error: ValidationError) -> Optional[SchemaShapeError]:
    """The first ``SchemaShapeError`` raised inside a pydantic validator, if any."""
    for detail in error.errors():
        cause = (detail.get("ctx") or {}).get("error")
        if isinstance(cause, SchemaShapeError):
            return cause
    return None


class ComponentLoader:
    """
    Loader for component descriptions.

    Handles:
    - YAML and JSON files
    - the optional ``component:`` wrapper
    - validation and error reporting with file and line context
    """

    def __init__(self):
        self._current_file: Optional[Path] = None

    def parse_file(self, file_path: Union[str, Path]) -> Component:
        """
        Parse a component description file.

        Args:
            file_path: Path to a YAML or JSON description

        Returns:
            Component: Validated component model

        Raises:
            ParseError: If the file is missing, malformed or invalid
            SchemaShapeError: If a value is outside its allowed set
        """
        file_path = Path(file_path).resolve()
        self._current_file = file_path

        if not file_path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_num = mark.line + 1 if mark else None
            raise ParseError(f"YAML syntax error: {e}", file_path, line_num)

        logger.debug("Loaded description %s", file_path)
        return self.parse_dict(data, file_path)

    def parse_dict(self, data: Any, file_path: Optional[Path] = None) -> Component:
        """
        Validate an already loaded description.

        Raises:
            ParseError: If the data is not a valid component description
            SchemaShapeError: If a value is outside its allowed set
        """
        if not isinstance(data, dict):
            raise ParseError("Root element must be a YAML object/dictionary", file_path)

        if "component" in data:
            data = data["component"]
            if not isinstance(data, dict):
                raise ParseError("'component' must be a YAML object/dictionary", file_path)

        try:
            return Component(**self._normalize(data))
        except ValidationError as e:
            shape_error = _schema_shape_error(e)
            if shape_error is not None:
                raise shape_error from e
            issues = [
                "{}: {}".format(" -> ".join(str(x) for x in error["loc"]), error["msg"])
                for error in e.errors()
            ]
            name = data.get("name")
            raise ParseError(
                "Validation failed:",
                file_path,
                component=name if isinstance(name, str) else None,
                issues=issues,
            )

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
        """Drop top-level ``null`` values so model defaults apply."""
        return filter_none(data)
