"""Prayer rotation for Prayer Diary.

Every approved person and every topic can be bound to a day of the month
(1-31) and a month-parity filter. For a given date, the daily selection is
everyone whose day matches and whose filter allows that month. Day 0 means
unassigned. Days that don't exist in a month (31 April, 30 February) are
never selected that month; nothing rolls over.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from prayer_diary.database import fold_name
from prayer_diary.models import ApprovalState, MonthFilter, PrayerTopic, Profile
from prayer_diary.utils.logging import get_logger

logger = get_logger(__name__)

MIN_DAY = 1
MAX_DAY = 31

# Rendered between the people and the topics of a day
SEPARATOR = "separator"


class SubjectKind(str, Enum):
    PERSON = "person"
    TOPIC = "topic"


class RotationError(Exception):
    """Base class for rotation errors."""


class InvalidDay(RotationError):
    def __init__(self, day):
        super().__init__(f"Day must be between {MIN_DAY} and {MAX_DAY}, got {day}")
        self.day = day


class InvalidMonthFilter(RotationError):
    def __init__(self, months):
        super().__init__(f"Unknown month filter: {months}")
        self.months = months


class PermissionDenied(RotationError):
    """Caller lacks the calendar editor capability."""


class SubjectNotFound(RotationError):
    def __init__(self, kind: SubjectKind, subject_id: int):
        super().__init__(f"{kind.value.capitalize()} {subject_id} not found")
        self.kind = kind
        self.subject_id = subject_id


class StoreUnavailable(RotationError):
    """The record store failed to answer."""


@dataclass
class DailySelection:
    """People and topics to pray for on one date."""

    date: date
    people: list[Profile] = field(default_factory=list)
    topics: list[PrayerTopic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.people and not self.topics

    def entries(self) -> Iterator[Profile | PrayerTopic | str]:
        """People first, then topics, with a SEPARATOR marker between them."""
        yield from self.people
        if self.people and self.topics:
            yield SEPARATOR
        yield from self.topics


@dataclass
class Assignments:
    unassigned: list = field(default_factory=list)
    assigned: list = field(default_factory=list)


def _model_for(kind: SubjectKind):
    return Profile if kind == SubjectKind.PERSON else PrayerTopic


def _name_column(kind: SubjectKind):
    return Profile.display_name if kind == SubjectKind.PERSON else PrayerTopic.title


def _name_order(column, id_column):
    # Folded name, then exact name, then id so ties never depend on the store
    return (func.fold_name(column).asc(), column.asc(), id_column.asc())


def _people_in_rotation(db: Session):
    return db.query(Profile).filter(
        Profile.approval_state == ApprovalState.APPROVED.value,
        Profile.calendar_hide == False,  # noqa: E712
    )


def get_subject(db: Session, kind: SubjectKind, subject_id: int):
    model = _model_for(kind)
    subject = db.query(model).filter(model.id == subject_id).first()
    if not subject:
        raise SubjectNotFound(kind, subject_id)
    return subject


def _count_for_day(db: Session, kind: SubjectKind, day: int) -> int:
    if kind == SubjectKind.PERSON:
        query = _people_in_rotation(db)
    else:
        query = db.query(PrayerTopic)
    model = _model_for(kind)
    return query.filter(model.pray_day == day).count()


def validate_day(day) -> int:
    """Return day if it is a valid day of the month, else raise InvalidDay."""
    if isinstance(day, bool) or not isinstance(day, int) or not MIN_DAY <= day <= MAX_DAY:
        raise InvalidDay(day)
    return day


def validate_month_filter(months) -> MonthFilter:
    try:
        return MonthFilter(months)
    except ValueError:
        raise InvalidMonthFilter(months) from None


def assign_to_day(
    db: Session, kind: SubjectKind, subject_id: int, day: int, can_edit: bool
) -> int:
    """Bind a person or topic to a day of the month.

    pray_months is left as it is. Concurrent reassignment of the same subject
    is last-write-wins.

    Returns the number of subjects of this kind now assigned to that day.
    """
    if not can_edit:
        raise PermissionDenied("Calendar editor permission required")
    validate_day(day)

    try:
        subject = get_subject(db, kind, subject_id)
        subject.pray_day = day
        db.commit()
        count = _count_for_day(db, kind, day)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to assign %s %s to day %s", kind.value, subject_id, day)
        raise StoreUnavailable(str(exc)) from exc

    logger.info("Assigned %s %s to day %s (%s on that day)", kind.value, subject_id, day, count)
    return count


def set_month_filter(
    db: Session, kind: SubjectKind, subject_id: int, months, can_edit: bool
) -> MonthFilter:
    """Set the month-parity filter of a person or topic.

    Independent of the day: it may be set before or after a day is chosen.
    """
    if not can_edit:
        raise PermissionDenied("Calendar editor permission required")
    month_filter = validate_month_filter(months)

    try:
        subject = get_subject(db, kind, subject_id)
        subject.pray_months = int(month_filter)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to set month filter of %s %s", kind.value, subject_id)
        raise StoreUnavailable(str(exc)) from exc

    logger.info("Set %s %s month filter to %s", kind.value, subject_id, month_filter.name)
    return month_filter


def list_assignments(
    db: Session, kind: SubjectKind, filter_text: str | None = None
) -> Assignments:
    """Partition subjects into unassigned (by name) and assigned (by day, then name).

    People are limited to approved profiles. filter_text narrows both groups by
    a case- and accent-insensitive substring of the display name or topic title.
    """
    model = _model_for(kind)
    name_column = _name_column(kind)

    if kind == SubjectKind.PERSON:
        query = db.query(Profile).filter(Profile.approval_state == ApprovalState.APPROVED.value)
    else:
        query = db.query(PrayerTopic)

    if filter_text:
        needle = fold_name(filter_text)
        query = query.filter(func.fold_name(name_column).contains(needle, autoescape=True))

    try:
        unassigned = (
            query.filter(model.pray_day == 0).order_by(*_name_order(name_column, model.id)).all()
        )
        assigned = (
            query.filter(model.pray_day > 0)
            .order_by(model.pray_day.asc(), *_name_order(name_column, model.id))
            .all()
        )
    except SQLAlchemyError as exc:
        raise StoreUnavailable(str(exc)) from exc

    return Assignments(unassigned=unassigned, assigned=assigned)


def count_by_day(db: Session, kind: SubjectKind) -> dict[int, int]:
    """Number of subjects assigned to each day, for annotating a day picker.

    Only days with at least one subject appear. Unassigned subjects are not
    counted, and people are counted only when approved and visible.
    """
    model = _model_for(kind)
    if kind == SubjectKind.PERSON:
        query = _people_in_rotation(db)
    else:
        query = db.query(PrayerTopic)

    try:
        rows = (
            query.filter(model.pray_day >= MIN_DAY, model.pray_day <= MAX_DAY)
            .with_entities(model.pray_day, func.count(model.id))
            .group_by(model.pray_day)
            .all()
        )
    except SQLAlchemyError as exc:
        raise StoreUnavailable(str(exc)) from exc

    return {day: count for day, count in sorted(rows)}


def select_for_date(db: Session, on_date: date) -> DailySelection:
    """Select the people and topics to pray for on a date.

    A pure read: on_date may be a preview date chosen by an admin, and nothing
    is persisted. The same date always yields the same ordered result.
    """
    day = on_date.day
    months = [int(m) for m in MonthFilter.matching(on_date.month)]

    try:
        people = (
            _people_in_rotation(db)
            .filter(Profile.pray_day == day, Profile.pray_months.in_(months))
            .order_by(*_name_order(Profile.display_name, Profile.id))
            .all()
        )
        topics = (
            db.query(PrayerTopic)
            .filter(PrayerTopic.pray_day == day, PrayerTopic.pray_months.in_(months))
            .order_by(*_name_order(PrayerTopic.title, PrayerTopic.id))
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to load daily selection for %s", on_date)
        raise StoreUnavailable(str(exc)) from exc

    return DailySelection(date=on_date, people=people, topics=topics)


def select_for_range(db: Session, start: date, end: date) -> list[DailySelection]:
    """Daily selection for every date from start to end inclusive."""
    selections = []
    current = start
    while current <= end:
        selections.append(select_for_date(db, current))
        current += timedelta(days=1)
    return selections
