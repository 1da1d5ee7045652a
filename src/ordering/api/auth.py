"""Caller resolution from request headers.

Authentication is done upstream; the gateway forwards the authenticated
user in ``X-User-Id`` and their role in ``X-User-Role``.
"""

from fastapi import Depends, Header, HTTPException

from ordering.access import Caller, Role


def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        role = Role(x_user_role.upper())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}") from None
    return Caller(user_id=x_user_id, role=role)


def require_role(*roles: Role):
    """Dependency that admits only callers holding one of ``roles``."""

    def dependency(caller: Caller = Depends(current_caller)) -> Caller:
        if caller.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient role for this operation")
        return caller

    return dependency
