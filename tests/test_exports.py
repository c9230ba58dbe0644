# -*- coding: utf-8 -*-

from __future__ import annotations

import csv
import io
import unittest
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException

from coachhub.exports import CalendarEvent, build_ics, format_ics_datetime, format_script_as_text, to_csv
from coachhub.exports.ics import escape_text, resolve_timezone


class TestCsv(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual(to_csv([]), "")

    def test_quoting_and_lists(self) -> None:
        rows = [
            {"title": 'Say "no" to excuses', "tags": ["faith", "grit"], "done": True, "notes": None},
            {"title": "Line one\nline two", "tags": [], "done": False, "notes": "a, b"},
        ]
        text = to_csv(rows, [("title", "Title"), ("tags", "Tags"), "done", "notes"])
        self.assertTrue(text.startswith("Title,Tags,done,notes\n"))
        self.assertIn('"Say ""no"" to excuses"', text)
        parsed = list(csv.reader(io.StringIO(text)))
        self.assertEqual(parsed[1], ['Say "no" to excuses', "faith; grit", "true", ""])
        self.assertEqual(parsed[2], ["Line one\nline two", "", "false", "a, b"])

    def test_columns_default_to_first_row_keys(self) -> None:
        text = to_csv([{"a": 1, "b": 2}, {"a": 3, "c": 4}])
        self.assertEqual(text.splitlines(), ["a,b", "1,2", "3,"])


class TestIcs(unittest.TestCase):
    def test_escape(self) -> None:
        self.assertEqual(escape_text("a,b;c\\d\ne"), "a\\,b\\;c\\\\d\\ne")

    def test_datetime_format(self) -> None:
        self.assertEqual(format_ics_datetime(datetime(2026, 3, 1, 9, 0)), "20260301T090000Z")
        eastern = timezone(timedelta(hours=-5))
        self.assertEqual(format_ics_datetime(datetime(2026, 3, 1, 9, 0, tzinfo=eastern)), "20260301T140000Z")

    def test_document(self) -> None:
        start = datetime(2026, 3, 1, 5, 30)
        events = [
            CalendarEvent(id="r1", title="Make the bed", start=start, end=start + timedelta(minutes=2)),
            CalendarEvent(title="Pray", start=start, end=start + timedelta(minutes=10), location="Home, office"),
        ]
        body = build_ics(events, "-//Test//EN", now=datetime(2026, 1, 1, tzinfo=timezone.utc))
        lines = body.split("\r\n")
        self.assertEqual(lines[0], "BEGIN:VCALENDAR")
        self.assertIn("PRODID:-//Test//EN", lines)
        self.assertEqual(body.count("BEGIN:VEVENT"), 2)
        self.assertIn("UID:r1-20260301T053000Z@redeemedstrength.com", lines)
        self.assertIn("DTSTAMP:20260101T000000Z", lines)
        self.assertIn("LOCATION:Home\\, office", lines)
        self.assertTrue(body.endswith("END:VCALENDAR\r\n"))

    def test_resolve_timezone(self) -> None:
        chicago = resolve_timezone("America/Chicago")
        self.assertEqual(format_ics_datetime(datetime(2026, 7, 4, 6, 0, tzinfo=chicago)), "20260704T110000Z")
        with self.assertRaises(HTTPException) as ctx:
            resolve_timezone("Nowhere/Land")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_no_events(self) -> None:
        body = build_ics([])
        self.assertNotIn("BEGIN:VEVENT", body)
        self.assertIn("END:VCALENDAR", body)


class TestScriptText(unittest.TestCase):
    def test_without_data(self) -> None:
        self.assertEqual(format_script_as_text({"title": "Empty"}), "Empty\n\nNo script data available.")

    def test_full_script(self) -> None:
        script = {
            "title": "Cell to Stage",
            "platform": "youtube",
            "content_type": "Short",
            "category": "story",
            "created_at": "2026-02-03T10:00:00Z",
            "script_data": {
                "approach": "Then vs now",
                "hook": {"what_to_say": "I did 6 years.", "camera_notes": "Tight on face", "duration": "3 seconds"},
                "body": [{"what_to_say": "Here's what changed.", "b_roll_notes": "Old mugshot"}],
                "cta": {"what_to_say": "Follow for part two.", "on_screen_text": "PART 2"},
                "hashtags": ["faith", "#redemption"],
                "filming_checklist": ["Charge phone", "Clean lens"],
                "total_duration": "45 seconds",
            },
        }
        text = format_script_as_text(script)
        self.assertIn("Platform: youtube | Type: Short | Category: story | Created: 2026-02-03", text)
        self.assertIn("Approach: Then vs now", text)
        self.assertIn('Say: "I did 6 years."', text)
        self.assertIn("--- SECTION 1 ---", text)
        self.assertIn("B-Roll: Old mugshot", text)
        self.assertIn("On-screen: PART 2", text)
        self.assertIn("#faith #redemption", text)
        self.assertIn("  2. Clean lens", text)
        self.assertIn("Duration: 45 seconds", text)

    def test_string_shaped_parts(self) -> None:
        script = {
            "title": "Loose",
            "script_data": {
                "hook": "Stop scrolling.",
                "body": ["Six years inside.", {"section": "Turn", "what_to_say": "Then I picked up a Bible."}],
                "cta": "Follow for part two.",
                "hashtags": "faith #grit",
                "filming_checklist": "Charge phone",
            },
        }
        text = format_script_as_text(script)
        self.assertIn('Say: "Stop scrolling."', text)
        self.assertIn("--- SECTION 1 ---\nScript: Six years inside.", text)
        self.assertIn("--- TURN ---", text)
        self.assertIn('Say: "Follow for part two."', text)
        self.assertIn("#faith #grit", text)
        self.assertIn("  1. Charge phone", text)

    def test_unknown_part_types_are_skipped(self) -> None:
        text = format_script_as_text({"title": "x", "script_data": {"hook": 7, "body": [None], "cta": ["a"]}})
        self.assertNotIn("THE HOOK", text)
        self.assertNotIn("CALL TO ACTION", text)
        self.assertIn("--- SECTION 1 ---", text)
