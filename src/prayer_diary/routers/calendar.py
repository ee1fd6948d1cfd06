"""Prayer calendar router for Prayer Diary."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from prayer_diary import rotation
from prayer_diary.config import get_local_timezone
from prayer_diary.database import get_db
from prayer_diary.models import PrayerTopic, Profile
from prayer_diary.permissions import (
    CALENDAR_EDITOR,
    caller_has_calendar_editor_permission,
    require_permission,
)
from prayer_diary.rotation import SEPARATOR, SubjectKind
from prayer_diary.schemas import (
    AssignmentResult,
    AssignmentsResponse,
    CalendarEntry,
    CalendarSubject,
    DailySelectionResponse,
    DayAssignment,
    MonthFilterAssignment,
)
from prayer_diary.utils.timezone import today_in

router = APIRouter(prefix="/api/calendar", tags=["calendar"])

EMPTY_MESSAGE = "No one to pray for today."


def to_subject(subject: Profile | PrayerTopic) -> CalendarSubject:
    if isinstance(subject, Profile):
        return CalendarSubject(
            kind="person",
            id=subject.id,
            name=subject.display_name,
            image_url=subject.image_url,
            pray_day=subject.pray_day,
            pray_months=subject.pray_months,
        )
    return CalendarSubject(
        kind="topic",
        id=subject.id,
        name=subject.title,
        image_url=subject.image_url,
        pray_day=subject.pray_day,
        pray_months=subject.pray_months,
    )


def to_entry(item: Profile | PrayerTopic | str) -> CalendarEntry:
    if isinstance(item, str):
        return CalendarEntry(kind="separator")
    if isinstance(item, Profile):
        return CalendarEntry(
            kind="person",
            id=item.id,
            name=item.display_name,
            text=item.prayer_points,
            image_url=item.image_url,
        )
    return CalendarEntry(
        kind="topic", id=item.id, name=item.title, text=item.body, image_url=item.image_url
    )


@router.get("/today", response_model=DailySelectionResponse)
def get_daily_selection(
    on_date: date | None = Query(
        None, alias="date", description="Preview another day instead of today (YYYY-MM-DD)"
    ),
    db: Session = Depends(get_db),
):
    """People and topics to pray for today, or on a preview date."""
    if on_date is None:
        on_date = today_in(get_local_timezone(db))

    selection = rotation.select_for_date(db, on_date)
    return DailySelectionResponse(
        date=selection.date,
        people=[to_subject(p) for p in selection.people],
        topics=[to_subject(t) for t in selection.topics],
        entries=[to_entry(item) for item in selection.entries()],
        empty=selection.is_empty,
        message=EMPTY_MESSAGE if selection.is_empty else None,
    )


@router.get(
    "/{kind}/assignments",
    response_model=AssignmentsResponse,
    dependencies=[Depends(require_permission(CALENDAR_EDITOR))],
)
def list_assignments(
    kind: SubjectKind,
    q: str | None = Query(None, description="Case-insensitive name filter"),
    db: Session = Depends(get_db),
):
    """List unassigned and assigned people or topics."""
    assignments = rotation.list_assignments(db, kind, q)
    return AssignmentsResponse(
        unassigned=[to_subject(s) for s in assignments.unassigned],
        assigned=[to_subject(s) for s in assignments.assigned],
    )


@router.get(
    "/{kind}/counts",
    response_model=dict[int, int],
    dependencies=[Depends(require_permission(CALENDAR_EDITOR))],
)
def count_by_day(kind: SubjectKind, db: Session = Depends(get_db)):
    """Number of people or topics on each day of the month."""
    return rotation.count_by_day(db, kind)


@router.put("/{kind}/{subject_id}/day", response_model=AssignmentResult)
def assign_to_day(
    kind: SubjectKind,
    subject_id: int,
    payload: DayAssignment,
    can_edit: bool = Depends(caller_has_calendar_editor_permission),
    db: Session = Depends(get_db),
):
    """Assign a person or topic to a day of the month."""
    day_count = rotation.assign_to_day(db, kind, subject_id, payload.day, can_edit)
    subject = rotation.get_subject(db, kind, subject_id)
    return AssignmentResult(subject=to_subject(subject), day_count=day_count)


@router.put("/{kind}/{subject_id}/months", response_model=AssignmentResult)
def set_month_filter(
    kind: SubjectKind,
    subject_id: int,
    payload: MonthFilterAssignment,
    can_edit: bool = Depends(caller_has_calendar_editor_permission),
    db: Session = Depends(get_db),
):
    """Show a person or topic in all, odd or even months."""
    rotation.set_month_filter(db, kind, subject_id, payload.months, can_edit)
    subject = rotation.get_subject(db, kind, subject_id)
    return AssignmentResult(subject=to_subject(subject))
