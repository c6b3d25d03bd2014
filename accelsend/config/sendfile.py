"""Sendfile offload configuration."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from accelsend.sendfile.mappings import AccelMapping, AccelMappings, parse_mapping_entry
from accelsend.sendfile.variants import SendfileVariant


class AccelMappingSettings(BaseModel):
    """One internal=>external prefix rewrite."""

    internal: str = Field(
        min_length=1,
        description="Local filesystem prefix, e.g. /var/www/uploads/",
    )

    external: str = Field(
        description="Location prefix nginx serves internally, e.g. /protected/",
    )


class SendfileSettings(BaseModel):
    """Offload behaviour applied to file responses."""

    variation: SendfileVariant | None = Field(
        default=None,
        description=(
            "Offload variant used when a request has no X-Sendfile-Type header "
            "(X-Sendfile, X-Lighttpd-Send-File or X-Accel-Redirect)"
        ),
    )

    mappings: list[AccelMappingSettings] = Field(
        default_factory=list,
        description="Ordered prefix mappings for X-Accel-Redirect; first match wins",
    )

    @field_validator("mappings", mode="before")
    @classmethod
    def normalize_mappings(cls, v: Any) -> Any:
        """Accept a table, 'internal=external' strings or a list of either."""
        if isinstance(v, dict):
            return [{"internal": k, "external": e} for k, e in v.items()]
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            normalized = []
            for item in v:
                if isinstance(item, str):
                    mapping = parse_mapping_entry(item)
                    if mapping is None:
                        raise ValueError(f"Invalid mapping entry: {item!r}")
                    item = {"internal": mapping.internal, "external": mapping.external}
                normalized.append(item)
            return normalized
        return v

    def to_mappings(self) -> AccelMappings:
        """Build the immutable mapping table."""
        return AccelMappings(
            entries=tuple(
                AccelMapping(internal=m.internal, external=m.external)
                for m in self.mappings
            )
        )
