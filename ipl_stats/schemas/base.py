"""Shared Pydantic base model for the camelCase wire format."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model serialised with camelCase keys.

    Attributes stay snake_case in Python; FastAPI emits the aliases because
    routes serialise responses ``by_alias``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
