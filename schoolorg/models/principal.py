from __future__ import annotations

from dataclasses import dataclass

ANONYMOUS_USER_ID = "anonymous"


@dataclass(frozen=True, slots=True)
class Principal:
    """Caller identity, carried through the request via FastAPI's dependency system.

    With AUTH_MODE=token it is built from a validated JWT:
        user_id: subject (``sub``) from the token
        roles: platform roles (``admin``, ``user``)

    With AUTH_MODE=off every request runs as the anonymous principal.
    """

    user_id: str
    roles: frozenset[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_platform_admin(self) -> bool:
        return "admin" in self.roles

    def is_anonymous(self) -> bool:
        return self.user_id == ANONYMOUS_USER_ID

    @staticmethod
    def anonymous() -> Principal:
        return Principal(user_id=ANONYMOUS_USER_ID, roles=frozenset())
