"""Tests for the printable prayer calendar."""

from datetime import date
from unittest.mock import patch

from prayer_diary import rotation
from prayer_diary.routers.print_calendar import (
    NO_PRAYER_POINTS,
    PrintCard,
    build_print_pages,
    current_month_range,
)


class TestBuildPrintPages:
    def test_pages_split_per_day(self, db, make_person, make_topic):
        for name in ("A", "B", "C"):
            make_person(name, day=1)
        make_topic("T", day=1)
        make_person("D", day=2)
        selections = rotation.select_for_range(db, date(2024, 1, 1), date(2024, 1, 3))

        pages = build_print_pages(selections, cards_per_page=2)
        assert [(p.date.day, [c.name for c in p.cards]) for p in pages] == [
            (1, ["A", "B"]),
            (1, ["C", "T"]),
            (2, ["D"]),
        ]
        assert [(p.number, p.total) for p in pages] == [(1, 3), (2, 3), (3, 3)]

    def test_missing_prayer_points(self, db, make_person):
        make_person("A", day=1)
        selections = rotation.select_for_range(db, date(2024, 1, 1), date(2024, 1, 1))
        pages = build_print_pages(selections, 4)
        assert pages[0].cards[0].text == NO_PRAYER_POINTS

    def test_no_pages_for_empty_range(self, db):
        selections = rotation.select_for_range(db, date(2024, 4, 1), date(2024, 4, 30))
        assert build_print_pages(selections, 4) == []

    def test_plain_text_is_escaped_into_paragraphs(self):
        card = PrintCard(name="Tom", text="Tom & Sarah\nTwins due")
        assert card.html == "<p>Tom &amp; Sarah</p><p>Twins due</p>"

    def test_rich_text_is_sanitized(self):
        card = PrintCard(
            name="Anna",
            text='<p>Exams</p><script>alert(1)</script><img src="x" onerror="alert(2)">',
        )
        assert "<p>Exams</p>" in card.html
        assert "script" not in card.html
        assert "onerror" not in card.html

    def test_current_month_range(self):
        assert current_month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
        assert current_month_range(date(2023, 4, 30)) == (date(2023, 4, 1), date(2023, 4, 30))


class TestPrintCalendarEndpoint:
    def test_renders_range(self, client, make_person):
        make_person("Anna", day=2, prayer_points="First line\nSecond line")
        response = client.get(
            "/print-calendar", params={"start": "2024-01-01", "end": "2024-01-03"}
        )
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        body = response.text
        assert "Day 2" in body
        assert "<p>First line</p><p>Second line</p>" in body
        assert "Page 1 of 1" in body

    def test_defaults_to_current_month(self, client, make_person):
        make_person("Anna", day=20)
        with patch("prayer_diary.routers.print_calendar.today_in", return_value=date(2024, 2, 5)):
            body = client.get("/print-calendar").text
        assert "Tuesday 20 February 2024" in body

    def test_start_after_end(self, client):
        response = client.get(
            "/print-calendar", params={"start": "2024-02-01", "end": "2024-01-01"}
        )
        assert response.status_code == 400

    def test_range_too_long(self, client):
        response = client.get(
            "/print-calendar", params={"start": "2020-01-01", "end": "2024-01-01"}
        )
        assert response.status_code == 400

    def test_member_markup_cannot_inject_script(self, client, make_person):
        make_person("Anna", day=2, prayer_points="<b>Exams</b><script>steal()</script>")
        body = client.get(
            "/print-calendar", params={"start": "2024-01-02", "end": "2024-01-02"}
        ).text
        assert "<b>Exams</b>" in body
        assert "steal()" not in body

    def test_empty_range_message(self, client):
        body = client.get(
            "/print-calendar", params={"start": "2024-01-01", "end": "2024-01-02"}
        ).text
        assert "No one is on the prayer calendar" in body
