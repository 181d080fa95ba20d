"""Membership endpoints: (user, org unit, role) assignments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from schoolorg.api.dependencies import (
    ensure_org_unit_access,
    get_authorizer,
    get_registry,
    require_user,
)
from schoolorg.api.schemas import (
    AckOut,
    MembershipCreateIn,
    MembershipDeleteIn,
    MembershipOut,
)
from schoolorg.db.registry import Registry
from schoolorg.models.principal import Principal
from schoolorg.services import membership_service
from schoolorg.services.access import OrgUnitAuthorizer
from schoolorg.services.errors import (
    MembershipAlreadyExistsError,
    MembershipValidationError,
    OrgUnitNotFoundError,
)

router = APIRouter(prefix="/memberships", tags=["memberships"])


@router.post("", response_model=MembershipOut, status_code=status.HTTP_201_CREATED)
async def create_membership(
    body: MembershipCreateIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
) -> MembershipOut:
    await ensure_org_unit_access(authorizer, principal, body.org_unit_id)

    try:
        membership = await membership_service.create_membership(
            registry,
            user_id=body.user_id,
            org_unit_id=body.org_unit_id,
            role=body.role,
        )
    except MembershipValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except OrgUnitNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="org unit not found"
        ) from None
    except MembershipAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="user already has a membership in this org unit",
        ) from None

    return MembershipOut.from_domain(membership)


@router.get("", response_model=list[MembershipOut])
async def list_memberships(
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    org_unit_id: Annotated[str | None, Query(alias="orgUnitId")] = None,
) -> list[MembershipOut]:
    """List memberships filtered by userId, orgUnitId, or both."""
    try:
        memberships = await membership_service.list_memberships(
            registry.memberships, user_id=user_id, org_unit_id=org_unit_id
        )
    except MembershipValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    allowed = await authorizer.authorize_many(
        principal, {m.org_unit_id for m in memberships}
    )
    return [
        MembershipOut.from_domain(m) for m in memberships if m.org_unit_id in allowed
    ]


@router.delete("", response_model=AckOut)
async def delete_membership(
    body: MembershipDeleteIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
) -> AckOut:
    """Remove the pair's membership; deleting a missing one still succeeds."""
    await ensure_org_unit_access(authorizer, principal, body.org_unit_id)
    await membership_service.delete_membership(
        registry.memberships, user_id=body.user_id, org_unit_id=body.org_unit_id
    )
    return AckOut(ok=True)
