"""Pre-defined users and the role gate applied to admin-only routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from grso_pos.errors import ForbiddenRoleError, UnknownUserError
from grso_pos.models.users import NavigationEntry, Role, User

logger = logging.getLogger(__name__)

USERS: list[User] = [
    User(id=1, name="Compte Administrateur", role=Role.ADMIN),
    User(id=2, name="Compte Vendeur", role=Role.SELLER),
]

NAVIGATION: list[NavigationEntry] = [
    NavigationEntry(id="dashboard", label="Tableau de Bord", roles=[Role.ADMIN, Role.SELLER]),
    NavigationEntry(id="pos", label="Point de Vente", roles=[Role.ADMIN, Role.SELLER]),
    NavigationEntry(id="inventory", label="Inventaire", roles=[Role.ADMIN]),
    NavigationEntry(id="transactions", label="Transactions", roles=[Role.ADMIN, Role.SELLER]),
    NavigationEntry(id="reports", label="Rapports", roles=[Role.ADMIN, Role.SELLER]),
    NavigationEntry(id="backup", label="Sauvegarde", roles=[Role.ADMIN]),
]


def get_user(user_id: int) -> User:
    for user in USERS:
        if user.id == user_id:
            return user
    raise UnknownUserError(user_id)


def navigation_for(user: User) -> list[NavigationEntry]:
    return [entry for entry in NAVIGATION if user.role in entry.roles]


def ensure_role(user: User, *roles: Role) -> User:
    if user.role not in roles:
        raise ForbiddenRoleError(f"Role {user.role.value} cannot access this operation")
    return user


async def get_current_user(
    user_id: Annotated[int, Header(alias="X-User-Id")],
) -> User:
    """Resolve the user picked on the login screen. No credentials involved."""

    try:
        return get_user(user_id)
    except UnknownUserError as error:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
        ) from error


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    try:
        return ensure_role(user, Role.ADMIN)
    except ForbiddenRoleError as error:
        logger.warning("User %s denied admin operation", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(error),
        ) from error


AdminUser = Annotated[User, Depends(require_admin)]
