"""User and role schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class Role(str, enum.Enum):
    ADMIN = "Admin"
    SELLER = "Vendeur"


class User(BaseModel):
    id: int
    name: str
    role: Role


class NavigationEntry(BaseModel):
    """A view the user may open from the application menu."""

    id: str
    label: str
    roles: list[Role]
