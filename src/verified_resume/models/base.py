"""Shared pydantic base for models exchanged with the generator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts the generator's camelCase keys, exposes snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump in the camelCase JSON shape, omitting absent optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
