"""Org-unit tree endpoints.

Creation writes the node's materialized ancestor path; the descendants
endpoint reads a whole subtree back with one filter query.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from schoolorg.api.dependencies import (
    ensure_org_unit_access,
    get_authorizer,
    get_registry,
    require_user,
)
from schoolorg.api.schemas import (
    CoveredOrgUnitsOut,
    DescendantsIn,
    OrgUnitCreateIn,
    OrgUnitOut,
)
from schoolorg.db.registry import Registry
from schoolorg.models.principal import Principal
from schoolorg.services import hierarchy_service
from schoolorg.services.access import OrgUnitAuthorizer
from schoolorg.services.errors import OrgUnitNotFoundError, OrgUnitValidationError

router = APIRouter(tags=["org-units"])


@router.get("/org-units", response_model=list[OrgUnitOut])
async def list_roots(
    _principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
) -> list[OrgUnitOut]:
    roots = await hierarchy_service.list_roots(registry.org_units)
    return [OrgUnitOut.from_domain(n) for n in roots]


@router.post(
    "/org-units", response_model=OrgUnitOut, status_code=status.HTTP_201_CREATED
)
async def create_org_unit(
    body: OrgUnitCreateIn,
    request: Request,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
) -> OrgUnitOut:
    """Create a root, or a child when parentId is given."""
    parent_id = body.parent_id or None
    await ensure_org_unit_access(authorizer, principal, parent_id)

    try:
        node = await hierarchy_service.create_node(
            registry.org_units,
            name=body.name,
            parent_id=parent_id,
            strict_parent=request.app.state.strict_parent,
        )
    except OrgUnitValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except OrgUnitNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="parent org unit not found"
        ) from None

    return OrgUnitOut.from_domain(node)


@router.post("/org-units/descendants", response_model=list[OrgUnitOut])
async def list_descendants(
    body: DescendantsIn,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
) -> list[OrgUnitOut]:
    """Return the unit itself plus everything below it (empty if unknown)."""
    await ensure_org_unit_access(authorizer, principal, body.org_unit_id)
    nodes = await hierarchy_service.find_descendants(
        registry.org_units, body.org_unit_id
    )
    return [OrgUnitOut.from_domain(n) for n in nodes]


@router.get("/org-units/{org_unit_id}", response_model=OrgUnitOut)
async def get_org_unit(
    org_unit_id: str,
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
    authorizer: Annotated[OrgUnitAuthorizer, Depends(get_authorizer)],
) -> OrgUnitOut:
    await ensure_org_unit_access(authorizer, principal, org_unit_id)
    try:
        node = await hierarchy_service.get_node(registry.org_units, org_unit_id)
    except OrgUnitNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="org unit not found"
        ) from None
    return OrgUnitOut.from_domain(node)


@router.get("/me/org-units", response_model=CoveredOrgUnitsOut)
async def my_org_units(
    principal: Annotated[Principal, Depends(require_user)],
    registry: Annotated[Registry, Depends(get_registry)],
) -> CoveredOrgUnitsOut:
    """Units the caller belongs to, plus all their descendants."""
    covered = await hierarchy_service.covered_org_unit_ids(
        registry, principal.user_id
    )
    return CoveredOrgUnitsOut(org_unit_ids=sorted(covered))
