"""Capability checks for Prayer Diary.

Sessions are handled in front of this service, which passes the signed-in
member's profile id in the ``X-Profile-Id`` header. A member holds a
capability when they are approved and either an administrator or flagged
for it.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import ApprovalState, Profile
from prayer_diary.utils.logging import get_logger

logger = get_logger(__name__)

CALENDAR_EDITOR = "prayer_calendar_editor"
UPDATE_EDITOR = "prayer_update_editor"
URGENT_EDITOR = "urgent_prayer_editor"
APPROVAL_ADMIN = "approval_admin"
ADMINISTRATOR = "administrator"


def get_caller(
    x_profile_id: int | None = Header(None),
    db: Session = Depends(get_db),
) -> Profile | None:
    """Resolve the calling member, or None when the request is anonymous."""
    if x_profile_id is None:
        return None
    return db.query(Profile).filter(Profile.id == x_profile_id).first()


def has_permission(caller: Profile | None, capability: str) -> bool:
    if caller is None or caller.approval_state != ApprovalState.APPROVED.value:
        return False
    if caller.user_role == "Administrator":
        return True
    if capability == ADMINISTRATOR:
        return False
    return bool(getattr(caller, capability, False))


def caller_has_calendar_editor_permission(caller: Profile | None = Depends(get_caller)) -> bool:
    return has_permission(caller, CALENDAR_EDITOR)


def require_permission(capability: str):
    """Build a dependency that answers 403 unless the caller holds capability."""

    def dependency(caller: Profile | None = Depends(get_caller)) -> Profile:
        if not has_permission(caller, capability):
            logger.warning(
                "Denied %s to profile %s", capability, caller.id if caller else "anonymous"
            )
            raise HTTPException(status_code=403, detail=f"{capability} permission required")
        return caller

    return dependency
