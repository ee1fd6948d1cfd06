"""Printable prayer calendar for Prayer Diary.

Pages the daily selection across a date range into print-ready HTML,
one or more pages per day, at most ``cards_per_page`` cards per page.
"""

import calendar as cal_module
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import nh3
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup
from sqlalchemy.orm import Session

from prayer_diary import rotation
from prayer_diary.config import get_local_timezone, settings
from prayer_diary.database import get_db
from prayer_diary.models import Profile
from prayer_diary.rotation import DailySelection
from prayer_diary.utils.timezone import today_in

router = APIRouter(tags=["print"])

BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

NO_PRAYER_POINTS = "No prayer points provided."


@dataclass
class PrintCard:
    name: str
    text: str
    image_url: str | None = None

    @property
    def html(self) -> Markup:
        """Prayer points as markup: rich text is sanitized, plain text becomes paragraphs."""
        if "<" in self.text:
            return Markup(nh3.clean(self.text))
        lines = [line for line in self.text.splitlines() if line.strip()]
        return Markup("").join(Markup("<p>{}</p>").format(line) for line in lines)


@dataclass
class PrintPage:
    date: date
    cards: list[PrintCard] = field(default_factory=list)
    number: int = 0
    total: int = 0


def _card_for(subject) -> PrintCard:
    if isinstance(subject, Profile):
        return PrintCard(
            name=subject.display_name,
            text=subject.prayer_points or NO_PRAYER_POINTS,
            image_url=subject.image_url,
        )
    return PrintCard(name=subject.title, text=subject.body or "", image_url=subject.image_url)


def build_print_pages(selections: list[DailySelection], cards_per_page: int) -> list[PrintPage]:
    """Split each day's cards into pages and number them across the whole range.

    Days with nothing selected produce no pages.
    """
    pages = []
    for selection in selections:
        cards = [_card_for(s) for s in selection.people + selection.topics]
        for i in range(0, len(cards), cards_per_page):
            pages.append(PrintPage(date=selection.date, cards=cards[i : i + cards_per_page]))

    for number, page in enumerate(pages, start=1):
        page.number = number
        page.total = len(pages)
    return pages


def current_month_range(today: date) -> tuple[date, date]:
    last_day = cal_module.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


@router.get("/print-calendar", response_class=HTMLResponse)
def print_calendar(
    request: Request,
    start: date | None = Query(None, description="First day (defaults to start of this month)"),
    end: date | None = Query(None, description="Last day (defaults to end of this month)"),
    cards_per_page: int = Query(settings.PRINT_CARDS_PER_PAGE, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Render the prayer calendar for a date range as printable pages."""
    today = today_in(get_local_timezone(db))
    month_start, month_end = current_month_range(today)
    start = start or month_start
    end = end or month_end

    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    if (end - start).days + 1 > settings.PRINT_MAX_DAYS:
        raise HTTPException(
            status_code=400,
            detail=f"Date range is limited to {settings.PRINT_MAX_DAYS} days",
        )

    selections = rotation.select_for_range(db, start, end)
    pages = build_print_pages(selections, cards_per_page)

    return templates.TemplateResponse(
        request,
        "print_calendar.html",
        {
            "pages": pages,
            "start": start,
            "end": end,
            "generated_on": today.strftime("%d %B %Y"),
        },
    )
