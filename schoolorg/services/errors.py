"""Exception taxonomy shared by the service layer.

Routes map these onto HTTP statuses:
  ValidationError -> 422, NotFoundError -> 404, ConflictError -> 409.
StoreError is never caught by a route and surfaces as a plain 500.
"""

from __future__ import annotations


class ValidationError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


class ConflictError(Exception):
    pass


class StoreError(RuntimeError):
    pass


class OrgUnitValidationError(ValidationError):
    pass


class OrgUnitNotFoundError(NotFoundError):
    def __init__(self, org_unit_id: str) -> None:
        super().__init__(f"org unit not found: {org_unit_id}")
        self.org_unit_id = org_unit_id


class MembershipValidationError(ValidationError):
    pass


class MembershipAlreadyExistsError(ConflictError):
    def __init__(self, user_id: str, org_unit_id: str) -> None:
        super().__init__(f"membership already exists: {user_id}@{org_unit_id}")
        self.user_id = user_id
        self.org_unit_id = org_unit_id
