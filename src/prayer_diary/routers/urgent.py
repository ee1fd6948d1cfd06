"""Urgent prayer requests router for Prayer Diary."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import Profile, UrgentPrayer
from prayer_diary.permissions import URGENT_EDITOR, require_permission
from prayer_diary.routers.updates import check_content
from prayer_diary.schemas import (
    ActiveUpdate,
    UrgentPrayerCreate,
    UrgentPrayerEdit,
    UrgentPrayerResponse,
)

router = APIRouter(prefix="/api/urgent", tags=["urgent"])

require_editor = require_permission(URGENT_EDITOR)


def _get_urgent(db: Session, prayer_id: int) -> UrgentPrayer:
    prayer = db.query(UrgentPrayer).filter(UrgentPrayer.id == prayer_id).first()
    if not prayer:
        raise HTTPException(status_code=404, detail="Urgent prayer not found")
    return prayer


@router.get("", response_model=list[UrgentPrayerResponse])
def list_urgent(
    include_inactive: bool = Query(False, description="Include deactivated requests"),
    db: Session = Depends(get_db),
):
    """List urgent prayer requests, newest first."""
    query = db.query(UrgentPrayer)
    if not include_inactive:
        query = query.filter(UrgentPrayer.is_active == True)  # noqa: E712
    return query.order_by(UrgentPrayer.created_at.desc(), UrgentPrayer.id.desc()).all()


@router.post("", response_model=UrgentPrayerResponse, status_code=201)
def create_urgent(
    prayer: UrgentPrayerCreate,
    editor: Profile = Depends(require_editor),
    db: Session = Depends(get_db),
):
    """Raise a new urgent prayer request."""
    db_prayer = UrgentPrayer(
        title=prayer.title,
        content=check_content(prayer.content),
        is_active=True,
        created_by=editor.id,
    )
    db.add(db_prayer)
    db.commit()
    db.refresh(db_prayer)
    return db_prayer


@router.get("/{prayer_id}", response_model=UrgentPrayerResponse)
def get_urgent(prayer_id: int, db: Session = Depends(get_db)):
    """Get a specific urgent prayer request by ID."""
    return _get_urgent(db, prayer_id)


@router.put(
    "/{prayer_id}", response_model=UrgentPrayerResponse, dependencies=[Depends(require_editor)]
)
def edit_urgent(prayer_id: int, prayer: UrgentPrayerEdit, db: Session = Depends(get_db)):
    """Edit an urgent prayer request."""
    db_prayer = _get_urgent(db, prayer_id)

    if prayer.title is not None:
        db_prayer.title = prayer.title
    if prayer.content is not None:
        db_prayer.content = check_content(prayer.content)

    db.commit()
    db.refresh(db_prayer)
    return db_prayer


@router.put(
    "/{prayer_id}/active",
    response_model=UrgentPrayerResponse,
    dependencies=[Depends(require_editor)],
)
def set_active(prayer_id: int, payload: ActiveUpdate, db: Session = Depends(get_db)):
    """Deactivate or reactivate an urgent prayer request."""
    db_prayer = _get_urgent(db, prayer_id)
    db_prayer.is_active = payload.is_active
    db.commit()
    db.refresh(db_prayer)
    return db_prayer


@router.delete("/{prayer_id}", status_code=204, dependencies=[Depends(require_editor)])
def delete_urgent(prayer_id: int, db: Session = Depends(get_db)):
    """Delete an urgent prayer request."""
    db_prayer = _get_urgent(db, prayer_id)
    db.delete(db_prayer)
    db.commit()
    return None
