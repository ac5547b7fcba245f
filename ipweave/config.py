"""Generation options."""

from pathlib import Path
from typing import Union

import yaml
from pydantic import Field, field_validator

from ipweave.model.base import StrictModel
from ipweave.model.bus import DEFAULT_VIEW


class GenerationOptions(StrictModel):
    """
    Options of one generation run.

    Loadable from YAML with camelCase or snake_case keys::

        rtlView: RTLview
        validate: true
        includeMonitor: false
    """

    rtl_view: str = Field(default=DEFAULT_VIEW, description="Abstraction view supplying port maps")
    validate_output: bool = Field(
        default=False, alias="validate", description="Syntax-check every generated artifact"
    )
    include_regmap: bool = Field(default=True, description="Generate register routers")
    include_monitor: bool = Field(default=True, description="Generate a bus monitor when possible")
    file_extension: str = Field(default=".scala", description="Extension of written files")

    @field_validator("file_extension")
    @classmethod
    def dotted_extension(cls, v: str) -> str:
        if v and not v.startswith("."):
            return "." + v
        return v

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GenerationOptions":
        """Load options from a YAML file; an empty file gives the defaults."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
