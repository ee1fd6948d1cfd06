"""Prayer Diary database models."""

from datetime import datetime
from enum import Enum, IntEnum

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from prayer_diary.database import Base
from prayer_diary.utils.timezone import now_utc


class MonthFilter(IntEnum):
    """Month-parity filter for a rotation assignment."""

    ALL = 0
    ODD = 1
    EVEN = 2

    @classmethod
    def matching(cls, month: int) -> list["MonthFilter"]:
        """Filters that are shown in the given calendar month (1-12)."""
        if month % 2 == 1:
            return [cls.ALL, cls.ODD]
        return [cls.ALL, cls.EVEN]


class ApprovalState(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    EMAIL_ONLY = "EmailOnly"


class Profile(Base):
    """Member profile - a person on the prayer calendar."""

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(String(200))
    display_name: Mapped[str] = mapped_column(String(200))  # Name shown on the calendar
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    prayer_points: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    pray_day: Mapped[int] = mapped_column(Integer, default=0)  # 0 = unassigned, 1-31
    pray_months: Mapped[int] = mapped_column(Integer, default=MonthFilter.ALL)
    calendar_hide: Mapped[bool] = mapped_column(Boolean, default=False)
    approval_state: Mapped[str] = mapped_column(String(20), default=ApprovalState.PENDING.value)
    user_role: Mapped[str] = mapped_column(String(20), default="User")  # User, Administrator
    prayer_calendar_editor: Mapped[bool] = mapped_column(Boolean, default=False)
    prayer_update_editor: Mapped[bool] = mapped_column(Boolean, default=False)
    urgent_prayer_editor: Mapped[bool] = mapped_column(Boolean, default=False)
    approval_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(default=now_utc, onupdate=now_utc)

    @property
    def visible_in_calendar(self) -> bool:
        return not self.calendar_hide


class PrayerTopic(Base):
    """Non-person prayer subject, e.g. a mission organisation."""

    __tablename__ = "prayer_topics"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    body: Mapped[str | None] = mapped_column(Text, nullable=True)  # Rich text (HTML)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    pray_day: Mapped[int] = mapped_column(Integer, default=0)
    pray_months: Mapped[int] = mapped_column(Integer, default=MonthFilter.ALL)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)  # FK to profiles.id
    created_at: Mapped[datetime] = mapped_column(default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(default=now_utc, onupdate=now_utc)


class PrayerUpdate(Base):
    """Prayer update posted to the whole congregation."""

    __tablename__ = "prayer_updates"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(default=now_utc, onupdate=now_utc)


class UrgentPrayer(Base):
    """Urgent prayer request."""

    __tablename__ = "urgent_prayers"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(default=now_utc, onupdate=now_utc)


class Setting(Base):
    """Key-value settings store."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(default=now_utc, onupdate=now_utc)
