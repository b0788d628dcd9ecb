"""Shared base model for vendor payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VendorModel(BaseModel):
    """Model that reads and writes the vendor's camelCase JSON.

    Unknown fields are kept so snapshots preserve everything the API sent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, object]:
        """Dump to a JSON-compatible dict using the vendor's field names."""
        return self.model_dump(mode="json", by_alias=True)
