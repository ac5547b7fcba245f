"""
Base models for component descriptions.

Provides shared base models with centralized configuration for all
schema classes, so concrete models do not repeat ``model_config``.

Architecture Decision:
    Two ``extra`` policies exist on purpose:
    StrictModel (extra="forbid") is for top-level objects (Component,
    BusInterface, Port) where extra fields indicate user typos.
    FlexibleModel (extra="ignore") is for memory-map models where vendor
    extensions such as ``vendorExtensions`` must be accepted silently.
"""

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class IpweaveBaseModel(BaseModel):
    """Base model with shared configuration for all schema models.

    Provides camelCase aliasing and allows field population by either
    alias or Python name. Models are frozen: descriptions are immutable
    once loaded.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class StrictModel(IpweaveBaseModel):
    """Base model that forbids unknown fields."""

    model_config = {
        **IpweaveBaseModel.model_config,
        "extra": "forbid",
    }


class FlexibleModel(IpweaveBaseModel):
    """Base model that silently ignores unknown fields."""

    model_config = {
        **IpweaveBaseModel.model_config,
        "extra": "ignore",
    }


class VLNV(BaseModel):
    """
    Vendor-Library-Name-Version identifier.

    Only ``name`` is mandatory; descriptions written by hand often leave
    library or version empty.
    """

    vendor: str = Field(default="", description="Vendor identifier (e.g. 'sifive.com')")
    library: str = Field(default="", description="Library name (e.g. 'AMBA4')")
    name: str = Field(..., description="Name (e.g. 'AXI4')")
    version: str = Field(default="", description="Version string")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("vendor", "library", "name", "version", mode="before")
    @classmethod
    def strip_identifiers(cls, v: object, info: ValidationInfo) -> object:
        """Strip whitespace; numeric versions are accepted and stringified."""
        if isinstance(v, (int, float)):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            if info.field_name == "name" and not v:
                raise ValueError("name cannot be empty")
        return v

    @classmethod
    def from_string(cls, vlnv_string: str) -> "VLNV":
        """Parse VLNV from a colon-separated string.

        Example:
            >>> VLNV.from_string("amba.com:AMBA4:AXI4:r0p0_0").library
            'AMBA4'
        """
        parts = vlnv_string.split(":")
        if len(parts) != 4:
            raise ValueError(
                f"Invalid VLNV format: expected 4 colon-separated parts, got {len(parts)}. "
                f"Expected format: 'vendor:library:name:version'"
            )
        return cls(vendor=parts[0], library=parts[1], name=parts[2], version=parts[3])

    @property
    def full_name(self) -> str:
        """Return fully qualified VLNV string."""
        return f"{self.vendor}:{self.library}:{self.name}:{self.version}"

    def __str__(self) -> str:
        return self.full_name
