# core/authorization.py
from fastapi import Depends, HTTPException, status
from core.dependencies import get_current_user, CurrentUser
from utils.logger import get_logger

logger = get_logger("Authorization")

ELEVATED_ROLES = ("admin", "superadmin")

# actions every authenticated user may perform regardless of ownership
_OPEN_ACTIONS = {"review:create", "review:read", "restaurant:read", "ranking:read"}
_ELEVATED_ONLY = {"restaurant:create", "restaurant:update", "restaurant:delete"}
_OWNER_OR_ELEVATED = {"review:update", "review:delete"}

def is_elevated(user) -> bool:
    return user is not None and user.role in ELEVATED_ROLES

def has_capability(user, action: str, resource: dict | None = None) -> bool:
    """
    Single capability check, used by `require_capability` on routes and
    by the review service for ownership checks.

    `resource` is the target document as the services return it; for
    ownership checks it must carry `user_id`. Unknown actions are denied.
    """
    if user is None:
        return False
    if action in _OPEN_ACTIONS:
        return True
    if action in _ELEVATED_ONLY:
        return is_elevated(user)
    if action in _OWNER_OR_ELEVATED:
        if is_elevated(user):
            return True
        return resource is not None and resource.get("user_id") == user.id
    logger.warning(f"Unknown action checked: {action}")
    return False

def require_capability(action: str):
    """Route dependency: resolves the current user and 403s unless `has_capability` grants `action`."""
    async def _dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_capability(current_user, action):
            logger.warning(f"Forbidden: {current_user.id} role {current_user.role} lacks {action}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: insufficient role")
        return current_user
    return _dependency
