"""Prayer Diary Pydantic schemas."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from prayer_diary.models import ApprovalState, MonthFilter

# Sentinel value to distinguish "field not provided" from "field set to None"
UNSET = object()

# Profiles


class ProfileCreate(BaseModel):
    full_name: str = Field(min_length=1)
    display_name: str | None = None  # Defaults to full_name
    email: str | None = None
    prayer_points: str | None = None
    image_url: str | None = None


class ProfileUpdate(BaseModel):
    """Fields a member may change on their own profile."""

    full_name: str | None = None
    display_name: str | None = None
    email: str | None = None
    prayer_points: str | None = None
    image_url: str | None = UNSET  # None means "remove image"
    visible_in_calendar: bool | None = None


class ApprovalUpdate(BaseModel):
    approval_state: ApprovalState


class PermissionsUpdate(BaseModel):
    user_role: Literal["User", "Administrator"] | None = None
    prayer_calendar_editor: bool | None = None
    prayer_update_editor: bool | None = None
    urgent_prayer_editor: bool | None = None
    approval_admin: bool | None = None


class ProfileResponse(BaseModel):
    id: int
    full_name: str
    display_name: str
    email: str | None = None
    prayer_points: str | None = None
    image_url: str | None = None
    pray_day: int
    pray_months: MonthFilter
    visible_in_calendar: bool
    approval_state: ApprovalState
    user_role: str
    prayer_calendar_editor: bool
    prayer_update_editor: bool
    urgent_prayer_editor: bool
    approval_admin: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class BulkApprovalResponse(BaseModel):
    approved: int


# Topics


class TopicBase(BaseModel):
    title: str = Field(min_length=1)
    body: str | None = None
    image_url: str | None = None


class TopicCreate(TopicBase):
    pass


class TopicUpdate(BaseModel):
    title: str | None = None
    body: str | None = None
    image_url: str | None = UNSET  # None means "remove image"


class TopicResponse(TopicBase):
    id: int
    pray_day: int
    pray_months: MonthFilter
    created_by: int | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


# Calendar


class DayAssignment(BaseModel):
    day: StrictInt  # Range checked by the rotation module; JSON true is not day 1


class MonthFilterAssignment(BaseModel):
    months: StrictInt  # MonthFilter value: 0 all, 1 odd, 2 even


class CalendarSubject(BaseModel):
    """A person or topic as shown on the rotation admin screens."""

    kind: Literal["person", "topic"]
    id: int
    name: str
    image_url: str | None = None
    pray_day: int
    pray_months: MonthFilter


class AssignmentResult(BaseModel):
    subject: CalendarSubject
    day_count: int | None = None  # Subjects now on that day, for day assignments


class AssignmentsResponse(BaseModel):
    unassigned: list[CalendarSubject]
    assigned: list[CalendarSubject]


class CalendarEntry(BaseModel):
    """One item of the daily selection, in display order."""

    kind: Literal["person", "topic", "separator"]
    id: int | None = None
    name: str | None = None
    text: str | None = None  # Prayer points or topic body
    image_url: str | None = None


class DailySelectionResponse(BaseModel):
    date: dt.date
    people: list[CalendarSubject]
    topics: list[CalendarSubject]
    entries: list[CalendarEntry]
    empty: bool
    message: str | None = None


# Prayer updates


class PrayerUpdateBase(BaseModel):
    title: str = Field(min_length=1)
    content: str


class PrayerUpdateCreate(PrayerUpdateBase):
    pass


class PrayerUpdateEdit(BaseModel):
    title: str | None = None
    content: str | None = None


class ArchiveUpdate(BaseModel):
    is_archived: bool


class PrayerUpdateResponse(PrayerUpdateBase):
    id: int
    is_archived: bool
    created_by: int | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


# Urgent prayers


class UrgentPrayerBase(BaseModel):
    title: str = Field(min_length=1)
    content: str


class UrgentPrayerCreate(UrgentPrayerBase):
    pass


class UrgentPrayerEdit(BaseModel):
    title: str | None = None
    content: str | None = None


class ActiveUpdate(BaseModel):
    is_active: bool


class UrgentPrayerResponse(UrgentPrayerBase):
    id: int
    is_active: bool
    created_by: int | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


# Settings


class SettingsUpdate(BaseModel):
    """Bulk settings update: key/value pairs."""

    settings: dict[str, str]


class SettingsResponse(BaseModel):
    """All settings as a flat dict."""

    settings: dict[str, str]
