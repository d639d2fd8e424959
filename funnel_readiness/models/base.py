"""Shared pydantic base for models exchanged with the host application."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable model that reads and writes camelCase JSON.

    Attribute names stay snake_case; the host application sends camelCase
    keys (``priceId``, ``orderBumps``), and both spellings are accepted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape used by the host application."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
