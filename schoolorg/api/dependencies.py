from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from schoolorg.db.registry import Registry
from schoolorg.models.principal import Principal
from schoolorg.services import token_service
from schoolorg.services.access import OrgUnitAuthorizer

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is only an error when auth is required
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/oauth/token", auto_error=False)


def get_registry(request: Request) -> Registry:
    """Return the Registry built at startup."""
    return request.app.state.registry


def get_authorizer(request: Request) -> OrgUnitAuthorizer:
    return request.app.state.authorizer


def require_user(
    request: Request,
    raw_token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Principal:
    """Resolve the caller.

    With auth disabled every caller is the anonymous principal.  Otherwise
    the bearer JWT is validated and turned into a Principal.
    """
    if not request.app.state.auth_required:
        return Principal.anonymous()

    if raw_token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = token_service.decode_access_token(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(
        user_id=claims["sub"],
        roles=frozenset(claims.get("roles", [])),
    )
    logger.debug(
        "Token validated for user=%s roles=%s",
        principal.user_id,
        principal.roles,
    )
    return principal


async def ensure_org_unit_access(
    authorizer: OrgUnitAuthorizer,
    principal: Principal,
    org_unit_id: str | None,
) -> None:
    """Raise 403 unless the authorizer lets ``principal`` act on the unit.

    ``org_unit_id=None`` asks for the top of the tree (root creation).
    """
    if await authorizer.authorize(principal, org_unit_id):
        return
    logger.warning(
        "Access denied: user=%s org_unit=%s",
        principal.user_id,
        org_unit_id or "<root>",
        extra={"user_id": principal.user_id, "org_unit_id": org_unit_id},
    )
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="No access to this org unit",
    )
