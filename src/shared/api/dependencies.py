"""
Actor Dependencies
Builds the acting user from gateway headers and gates routes by role
"""
from __future__ import annotations

from typing import Annotated, Any, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from shared.exceptions import ForbiddenError
from shared.infrastructure.observability.logger import get_logger
from shared.roles import Actor, Role

logger = get_logger(__name__)


async def get_actor(
    x_user_id: Annotated[Optional[int], Header(alias="X-User-Id")] = None,
    x_user_role: Annotated[Optional[str], Header(alias="X-User-Role")] = None,
    x_organization_id: Annotated[Optional[int], Header(alias="X-Organization-Id")] = None,
) -> Actor:
    """
    Resolve the caller from headers set by the authenticating gateway.

    Credentials are verified upstream; the identity is trusted as supplied.

    Raises:
        HTTPException 401: if the identity headers are missing or the role is unknown
    """
    if x_user_id is None or not x_user_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id / X-User-Role headers",
        )
    try:
        role = Role(x_user_role)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role {x_user_role!r}",
        )
    return Actor(user_id=x_user_id, role=role, organization_id=x_organization_id)


CurrentActor = Annotated[Actor, Depends(get_actor)]


def require_roles(*allowed_roles: Role):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.post("/{course_id}/cancel", dependencies=[Depends(require_roles(Role.ADMIN, Role.SUPER_ADMIN))])
        async def cancel_course(...):
            ...

    Args:
        *allowed_roles: Roles that can access the endpoint

    Returns:
        Dependency function
    """

    async def check_roles(actor: CurrentActor) -> Actor:
        if actor.role not in allowed_roles:
            logger.warning(
                "access_denied",
                user_id=actor.user_id,
                role=actor.role.value,
                required_roles=[r.value for r in allowed_roles],
            )
            raise ForbiddenError(
                f"Role {actor.role.value} may not perform this action",
                details={"allowed": [r.value for r in allowed_roles]},
            )
        return actor

    return check_roles


def get_container(request: Request) -> Any:
    """The application's service container, set on ``app.state`` at startup."""
    return request.app.state.container
