"""Settings router for Prayer Diary."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import Setting
from prayer_diary.permissions import ADMINISTRATOR, require_permission
from prayer_diary.schemas import SettingsResponse, SettingsUpdate

router = APIRouter(tags=["settings"])


def _all_settings(db: Session) -> SettingsResponse:
    rows = db.query(Setting).all()
    return SettingsResponse(settings={r.key: r.value for r in rows})


@router.get("/api/settings", response_model=SettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    """Get all settings as a flat dict."""
    return _all_settings(db)


@router.put(
    "/api/settings",
    response_model=SettingsResponse,
    dependencies=[Depends(require_permission(ADMINISTRATOR))],
)
def update_settings(payload: SettingsUpdate, db: Session = Depends(get_db)):
    """Bulk upsert settings."""
    for key, value in payload.settings.items():
        existing = db.query(Setting).filter(Setting.key == key).first()
        if existing:
            existing.value = value
        else:
            db.add(Setting(key=key, value=value))
    db.commit()

    return _all_settings(db)
