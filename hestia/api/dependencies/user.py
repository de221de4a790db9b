"""
Caller Identity Dependency

Authentication happens upstream; the gateway forwards the verified user id
in the ``X-User-Id`` header. This dependency only parses it.

Usage:
======
    from hestia.api.dependencies.user import CurrentUserId

    @router.get("/draft")
    async def get_draft(user_id: CurrentUserId):
        ...
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header

from hestia.shared.core.exceptions import AuthenticationError
from hestia.shared.core.logging import log_context

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> UUID:
    """
    Identity of the calling user.

    Raises:
        AuthenticationError: Header missing or not a UUID
    """
    if not x_user_id:
        raise AuthenticationError(f"{USER_ID_HEADER} header required")

    try:
        user_id = UUID(x_user_id)
    except ValueError as e:
        raise AuthenticationError(
            f"{USER_ID_HEADER} header must be a UUID",
            details={"value": x_user_id},
        ) from e

    log_context(user_id=str(user_id))
    return user_id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
