"""Prayer updates router for Prayer Diary."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import PrayerUpdate, Profile
from prayer_diary.permissions import UPDATE_EDITOR, require_permission
from prayer_diary.schemas import (
    ArchiveUpdate,
    PrayerUpdateCreate,
    PrayerUpdateEdit,
    PrayerUpdateResponse,
)

router = APIRouter(prefix="/api/updates", tags=["updates"])

require_editor = require_permission(UPDATE_EDITOR)

# What an empty rich-text editor submits
EMPTY_EDITOR_CONTENT = ("", "<p><br></p>")


def check_content(content: str) -> str:
    """Reject content that is blank or only an empty editor paragraph."""
    if content.strip() in EMPTY_EDITOR_CONTENT:
        raise HTTPException(status_code=422, detail="Content must not be empty")
    return content


def _get_update(db: Session, update_id: int) -> PrayerUpdate:
    update = db.query(PrayerUpdate).filter(PrayerUpdate.id == update_id).first()
    if not update:
        raise HTTPException(status_code=404, detail="Prayer update not found")
    return update


@router.get("", response_model=list[PrayerUpdateResponse])
def list_updates(
    archived: bool = Query(False, description="List archived updates instead of current ones"),
    db: Session = Depends(get_db),
):
    """List current (or archived) updates, newest first."""
    return (
        db.query(PrayerUpdate)
        .filter(PrayerUpdate.is_archived == archived)
        .order_by(PrayerUpdate.created_at.desc(), PrayerUpdate.id.desc())
        .all()
    )


@router.post("", response_model=PrayerUpdateResponse, status_code=201)
def create_update(
    update: PrayerUpdateCreate,
    editor: Profile = Depends(require_editor),
    db: Session = Depends(get_db),
):
    """Post a new prayer update."""
    db_update = PrayerUpdate(
        title=update.title,
        content=check_content(update.content),
        created_by=editor.id,
    )
    db.add(db_update)
    db.commit()
    db.refresh(db_update)
    return db_update


@router.get("/{update_id}", response_model=PrayerUpdateResponse)
def get_update(update_id: int, db: Session = Depends(get_db)):
    """Get a specific prayer update by ID."""
    return _get_update(db, update_id)


@router.put(
    "/{update_id}", response_model=PrayerUpdateResponse, dependencies=[Depends(require_editor)]
)
def edit_update(update_id: int, update: PrayerUpdateEdit, db: Session = Depends(get_db)):
    """Edit the title or content of a prayer update."""
    db_update = _get_update(db, update_id)

    if update.title is not None:
        db_update.title = update.title
    if update.content is not None:
        db_update.content = check_content(update.content)

    db.commit()
    db.refresh(db_update)
    return db_update


@router.put(
    "/{update_id}/archive",
    response_model=PrayerUpdateResponse,
    dependencies=[Depends(require_editor)],
)
def set_archived(update_id: int, payload: ArchiveUpdate, db: Session = Depends(get_db)):
    """Archive or unarchive a prayer update."""
    db_update = _get_update(db, update_id)
    db_update.is_archived = payload.is_archived
    db.commit()
    db.refresh(db_update)
    return db_update


@router.delete("/{update_id}", status_code=204, dependencies=[Depends(require_editor)])
def delete_update(update_id: int, db: Session = Depends(get_db)):
    """Delete a prayer update."""
    db_update = _get_update(db, update_id)
    db.delete(db_update)
    db.commit()
    return None
