"""
Parameter schema: a JSON-schema-like tree of integer parameters.

Object nodes hold ordered named children; integer leaves may carry a
default. Leaf paths joined with ``_`` name the generated Scala parameters.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from ipweave.errors import SchemaShapeError

from .base import FlexibleModel


class ParamType(str, Enum):
    """Parameter schema node types."""

    OBJECT = "object"
    INTEGER = "integer"


class ParamNode(FlexibleModel):
    """One node of the parameter schema."""

    type: ParamType = Field(..., description="'object' or 'integer'")
    properties: Dict[str, "ParamNode"] = Field(
        default_factory=dict, description="Ordered children of an object node"
    )
    default: Optional[int] = Field(default=None, description="Default value of a leaf")
    title: str = Field(default="", description="Human readable title")
    description: str = Field(default="", description="Parameter description")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        allowed = [t.value for t in ParamType]
        if isinstance(v, str) and v not in allowed:
            raise SchemaShapeError.invalid_value("parameter type", v, allowed)
        return v

    @model_validator(mode="after")
    def check_shape(self) -> "ParamNode":
        if self.type == ParamType.INTEGER and self.properties:
            raise SchemaShapeError("integer parameter nodes cannot have properties")
        if self.type == ParamType.OBJECT and self.default is not None:
            raise SchemaShapeError("object parameter nodes cannot have a default")
        return self

    @property
    def is_leaf(self) -> bool:
        return self.type == ParamType.INTEGER


ParamNode.model_rebuild()
