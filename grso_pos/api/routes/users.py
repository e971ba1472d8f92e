"""Routes backing the login screen user picker."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from grso_pos.errors import UnknownUserError
from grso_pos.models.users import NavigationEntry, User
from grso_pos.services.users import USERS, get_user, navigation_for

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[User])
async def list_users() -> list[User]:
    return USERS


@router.get(
    "/{user_id}/navigation",
    response_model=list[NavigationEntry],
    summary="List the views the user's role may open",
)
async def user_navigation(user_id: int) -> list[NavigationEntry]:
    try:
        user = get_user(user_id)
    except UnknownUserError as error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error),
        ) from error
    return navigation_for(user)
