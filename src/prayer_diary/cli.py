"""Prayer Diary CLI commands."""

import sys
from datetime import date

from prayer_diary.config import get_local_timezone
from prayer_diary.database import SessionLocal, init_db
from prayer_diary.models import (
    ApprovalState,
    MonthFilter,
    PrayerTopic,
    PrayerUpdate,
    Profile,
    Setting,
    UrgentPrayer,
)
from prayer_diary.rotation import select_for_date
from prayer_diary.utils.timezone import today_in


def seed():
    """Seed the database with sample data for development."""
    init_db()
    db = SessionLocal()

    try:
        # Clear existing data
        db.query(UrgentPrayer).delete()
        db.query(PrayerUpdate).delete()
        db.query(PrayerTopic).delete()
        db.query(Setting).delete()
        db.query(Profile).delete()
        db.commit()

        admin = Profile(
            full_name="Ruth Admin",
            display_name="Ruth",
            approval_state=ApprovalState.APPROVED.value,
            user_role="Administrator",
            approval_admin=True,
            prayer_calendar_editor=True,
            prayer_update_editor=True,
            urgent_prayer_editor=True,
        )
        db.add(admin)
        db.flush()  # Get IDs assigned

        profiles = [
            Profile(
                full_name="Anna Baker",
                display_name="Anna Baker",
                prayer_points="Starting a new job this month.\nHer mum's health.",
                approval_state=ApprovalState.APPROVED.value,
                pray_day=1,
            ),
            Profile(
                full_name="Thomas Cole",
                display_name="Tom & Sarah Cole",
                prayer_points="Wisdom as they lead the youth group.",
                approval_state=ApprovalState.APPROVED.value,
                pray_day=15,
                pray_months=int(MonthFilter.ODD),
            ),
            Profile(
                full_name="Grace Dunn",
                display_name="Grace Dunn",
                prayer_points="Exams in the summer.",
                approval_state=ApprovalState.APPROVED.value,
                pray_day=15,
                pray_months=int(MonthFilter.EVEN),
            ),
            Profile(
                full_name="Peter Ellis",
                display_name="Peter Ellis",
                prayer_points="Recovering from surgery.",
                approval_state=ApprovalState.APPROVED.value,
                pray_day=31,
            ),
            Profile(
                full_name="Hannah Ford",
                display_name="Hannah Ford",
                approval_state=ApprovalState.PENDING.value,
            ),
        ]
        for profile in profiles:
            db.add(profile)

        topics = [
            PrayerTopic(
                title="Mission partners in Kenya",
                body="<p>For the new clinic opening in the spring.</p>",
                pray_day=1,
                created_by=admin.id,
            ),
            PrayerTopic(
                title="Food bank",
                body="<p>Volunteers and donations over the winter.</p>",
                pray_day=15,
                pray_months=int(MonthFilter.EVEN),
                created_by=admin.id,
            ),
        ]
        for topic in topics:
            db.add(topic)

        db.add(
            PrayerUpdate(
                title="Weekly update",
                content="<p>Thank you for praying for the building project.</p>",
                created_by=admin.id,
            )
        )
        db.add(Setting(key="local_timezone", value="Europe/London"))

        db.commit()
        print("✅ Database seeded with sample data")
        print(f"   - {len(profiles) + 1} profiles")
        print(f"   - {len(topics)} topics")
        print("   - 1 prayer update")
        print("   - 1 setting")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
    finally:
        db.close()


def preview():
    """Print who is prayed for on a date (today by default) without changing anything."""
    init_db()
    db = SessionLocal()

    try:
        if len(sys.argv) > 1:
            try:
                on_date = date.fromisoformat(sys.argv[1])
            except ValueError:
                print(f"❌ Not a date (YYYY-MM-DD): {sys.argv[1]}")
                sys.exit(1)
        else:
            on_date = today_in(get_local_timezone(db))

        selection = select_for_date(db, on_date)
        print(f"Prayer calendar for {on_date.strftime('%A %d %B %Y')}")
        if selection.is_empty:
            print("   No one to pray for today.")
            return

        for item in selection.entries():
            if isinstance(item, str):
                print("   ---")
            elif isinstance(item, Profile):
                print(f"   - {item.display_name}")
            else:
                print(f"   - {item.title}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
