"""Member profiles router for Prayer Diary."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import ApprovalState, MonthFilter, Profile
from prayer_diary.permissions import (
    ADMINISTRATOR,
    APPROVAL_ADMIN,
    get_caller,
    has_permission,
    require_permission,
)
from prayer_diary.schemas import (
    UNSET,
    ApprovalUpdate,
    BulkApprovalResponse,
    PermissionsUpdate,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
)
from prayer_diary.utils.logging import get_logger

router = APIRouter(prefix="/api/profiles", tags=["profiles"])
logger = get_logger(__name__)


def _get_profile(db: Session, profile_id: int) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("", response_model=list[ProfileResponse])
def list_profiles(
    approval_state: ApprovalState | None = Query(None, description="Only this approval state"),
    db: Session = Depends(get_db),
):
    """List profiles alphabetically by full name."""
    query = db.query(Profile)
    if approval_state is not None:
        query = query.filter(Profile.approval_state == approval_state.value)
    return query.order_by(Profile.full_name.asc(), Profile.id.asc()).all()


@router.post("", response_model=ProfileResponse, status_code=201)
def register_profile(profile: ProfileCreate, db: Session = Depends(get_db)):
    """Register a new member; they wait in Pending until approved."""
    db_profile = Profile(
        full_name=profile.full_name,
        display_name=profile.display_name or profile.full_name,
        email=profile.email,
        prayer_points=profile.prayer_points,
        image_url=profile.image_url,
        pray_day=0,
        pray_months=int(MonthFilter.ALL),
        approval_state=ApprovalState.PENDING.value,
    )
    db.add(db_profile)
    db.commit()
    db.refresh(db_profile)
    logger.info("Registered profile %s", db_profile.id)
    return db_profile


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(profile_id: int, db: Session = Depends(get_db)):
    """Get a specific profile by ID."""
    return _get_profile(db, profile_id)


@router.put("/{profile_id}", response_model=ProfileResponse)
def update_profile(
    profile_id: int,
    profile: ProfileUpdate,
    caller: Profile | None = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """Update a member's own details (administrators may edit anyone)."""
    db_profile = _get_profile(db, profile_id)
    if caller is None or (caller.id != profile_id and not has_permission(caller, ADMINISTRATOR)):
        raise HTTPException(status_code=403, detail="Cannot edit another member's profile")

    if profile.full_name is not None:
        db_profile.full_name = profile.full_name
    if profile.display_name is not None:
        db_profile.display_name = profile.display_name
    if profile.email is not None:
        db_profile.email = profile.email
    if profile.prayer_points is not None:
        db_profile.prayer_points = profile.prayer_points
    if profile.image_url is not UNSET:
        db_profile.image_url = profile.image_url
    if profile.visible_in_calendar is not None:
        db_profile.calendar_hide = not profile.visible_in_calendar

    db.commit()
    db.refresh(db_profile)
    return db_profile


@router.put(
    "/{profile_id}/approval",
    response_model=ProfileResponse,
    dependencies=[Depends(require_permission(APPROVAL_ADMIN))],
)
def set_approval(profile_id: int, payload: ApprovalUpdate, db: Session = Depends(get_db)):
    """Approve, reject or otherwise change a member's approval state."""
    db_profile = _get_profile(db, profile_id)
    db_profile.approval_state = payload.approval_state.value
    db.commit()
    db.refresh(db_profile)
    logger.info("Profile %s is now %s", profile_id, payload.approval_state.value)
    return db_profile


@router.post(
    "/approve-pending",
    response_model=BulkApprovalResponse,
    dependencies=[Depends(require_permission(APPROVAL_ADMIN))],
)
def approve_pending(db: Session = Depends(get_db)):
    """Approve every profile still waiting in Pending."""
    pending = db.query(Profile).filter(Profile.approval_state == ApprovalState.PENDING.value).all()
    for profile in pending:
        profile.approval_state = ApprovalState.APPROVED.value
    db.commit()
    logger.info("Bulk approved %s profiles", len(pending))
    return BulkApprovalResponse(approved=len(pending))


@router.put(
    "/{profile_id}/permissions",
    response_model=ProfileResponse,
    dependencies=[Depends(require_permission(ADMINISTRATOR))],
)
def set_permissions(profile_id: int, payload: PermissionsUpdate, db: Session = Depends(get_db)):
    """Change a member's role and editor permissions."""
    db_profile = _get_profile(db, profile_id)

    if payload.user_role is not None:
        db_profile.user_role = payload.user_role
    if payload.prayer_calendar_editor is not None:
        db_profile.prayer_calendar_editor = payload.prayer_calendar_editor
    if payload.prayer_update_editor is not None:
        db_profile.prayer_update_editor = payload.prayer_update_editor
    if payload.urgent_prayer_editor is not None:
        db_profile.urgent_prayer_editor = payload.urgent_prayer_editor
    if payload.approval_admin is not None:
        db_profile.approval_admin = payload.approval_admin

    db.commit()
    db.refresh(db_profile)
    return db_profile


@router.delete(
    "/{profile_id}",
    status_code=204,
    dependencies=[Depends(require_permission(ADMINISTRATOR))],
)
def delete_profile(profile_id: int, db: Session = Depends(get_db)):
    """Delete a profile."""
    db_profile = _get_profile(db, profile_id)
    db.delete(db_profile)
    db.commit()
    return None
