"""Shared pydantic configuration for persisted and API models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PosModel(BaseModel):
    """Base model serialized with camelCase keys.

    Backups and the durable storage slot use the camelCase layout
    (``lowStockThreshold``, ``paymentMethod``...), while Python code works
    with snake_case attributes. Both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
