"""Identifier generation for catalog entities and transactions."""

from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str) -> str:
    """Return an opaque identifier such as ``prod_3f9a0c1b2``."""

    return f"{prefix}_{uuid4().hex[:9]}"
