"""Prayer topics router for Prayer Diary."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from prayer_diary.database import get_db
from prayer_diary.models import MonthFilter, PrayerTopic, Profile
from prayer_diary.permissions import CALENDAR_EDITOR, require_permission
from prayer_diary.schemas import UNSET, TopicCreate, TopicResponse, TopicUpdate

router = APIRouter(prefix="/api/topics", tags=["topics"])

require_editor = require_permission(CALENDAR_EDITOR)


def _get_topic(db: Session, topic_id: int) -> PrayerTopic:
    topic = db.query(PrayerTopic).filter(PrayerTopic.id == topic_id).first()
    if not topic:
        raise HTTPException(status_code=404, detail="Topic not found")
    return topic


@router.get("", response_model=list[TopicResponse])
def list_topics(db: Session = Depends(get_db)):
    """List all topics by day, then title."""
    return (
        db.query(PrayerTopic)
        .order_by(PrayerTopic.pray_day.asc(), PrayerTopic.title.asc(), PrayerTopic.id.asc())
        .all()
    )


@router.post("", response_model=TopicResponse, status_code=201)
def create_topic(
    topic: TopicCreate,
    editor: Profile = Depends(require_editor),
    db: Session = Depends(get_db),
):
    """Create a new topic, unassigned and shown in all months."""
    db_topic = PrayerTopic(
        title=topic.title,
        body=topic.body,
        image_url=topic.image_url,
        pray_day=0,
        pray_months=int(MonthFilter.ALL),
        created_by=editor.id,
    )
    db.add(db_topic)
    db.commit()
    db.refresh(db_topic)
    return db_topic


@router.get("/{topic_id}", response_model=TopicResponse)
def get_topic(topic_id: int, db: Session = Depends(get_db)):
    """Get a specific topic by ID."""
    return _get_topic(db, topic_id)


@router.put("/{topic_id}", response_model=TopicResponse, dependencies=[Depends(require_editor)])
def update_topic(topic_id: int, topic: TopicUpdate, db: Session = Depends(get_db)):
    """Update a topic's text or image. Rotation fields go through the calendar API."""
    db_topic = _get_topic(db, topic_id)

    if topic.title is not None:
        db_topic.title = topic.title
    if topic.body is not None:
        db_topic.body = topic.body
    if topic.image_url is not UNSET:
        db_topic.image_url = topic.image_url

    db.commit()
    db.refresh(db_topic)
    return db_topic


@router.delete("/{topic_id}", status_code=204, dependencies=[Depends(require_editor)])
def delete_topic(topic_id: int, db: Session = Depends(get_db)):
    """Delete a topic."""
    db_topic = _get_topic(db, topic_id)
    db.delete(db_topic)
    db.commit()
    return None
