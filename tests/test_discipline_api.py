# -*- coding: utf-8 -*-

from __future__ import annotations

from support import AppTestCase


def _routine(action_text: str, time_slot: str = "5:30 AM", **overrides) -> dict:
    body = {"routine_type": "morning", "time_slot": time_slot, "action_text": action_text}
    body.update(overrides)
    return body


class TestDisciplineRoutines(AppTestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        cls.routines = []
        for text, minutes in (("Make the bed", 2), ("Pray", 10), ("Cold shower", 5)):
            resp = cls.admin.post("/api/discipline/routines", json=_routine(text, duration_minutes=minutes))
            assert resp.status_code == 200, resp.text
            cls.routines.append(resp.json())

    def test_display_order_appends(self) -> None:
        self.assertEqual([r["display_order"] for r in self.routines], [0, 1, 2])

    def test_member_reads_but_cannot_write(self) -> None:
        resp = self.member.get("/api/discipline/routines", params={"routine_type": "morning"})
        self.assertEqual(resp.status_code, 200)
        self.assertGreaterEqual(len(resp.json()), 3)
        resp = self.member.post("/api/discipline/routines", json=_routine("Sneaky"))
        self.assertEqual(resp.status_code, 403)

    def test_toggle_active_flips_only_that_routine(self) -> None:
        extra = [
            self.admin.post("/api/discipline/routines", json=_routine(f"Evening {i}", "9:00 PM", routine_type="evening")).json()
            for i in range(3)
        ]
        target = extra[1]
        resp = self.admin.post(f"/api/discipline/routines/{target['id']}/toggle-active")
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["is_active"])

        listed = {r["id"]: r for r in self.admin.get("/api/discipline/routines", params={"routine_type": "evening"}).json()}
        self.assertFalse(listed[target["id"]]["is_active"])
        self.assertTrue(listed[extra[0]["id"]]["is_active"])
        self.assertTrue(listed[extra[2]["id"]]["is_active"])

        resp = self.admin.post(f"/api/discipline/routines/{target['id']}/toggle-active")
        self.assertTrue(resp.json()["is_active"])

        for routine in extra:
            self.admin.delete(f"/api/discipline/routines/{routine['id']}")

    def test_toggle_active_unknown(self) -> None:
        resp = self.admin.post("/api/discipline/routines/missing/toggle-active")
        self.assertEqual(resp.status_code, 404)

    def test_completion_toggle_and_compliance(self) -> None:
        day = "2026-02-10"
        first = self.routines[0]["id"]
        resp = self.member.post("/api/discipline/completions/toggle", json={"routine_id": first, "completion_date": day})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["completed"])

        resp = self.member.get("/api/discipline/compliance", params={"date": day})
        stats = resp.json()
        self.assertEqual(stats["completed"], 1)
        self.assertEqual(stats["total"], 3)
        self.assertEqual(stats["percent"], 33)
        self.assertEqual(stats["completed_routine_ids"], [first])

        # Completions are per user.
        resp = self.admin.get("/api/discipline/compliance", params={"date": day})
        self.assertEqual(resp.json()["completed"], 0)

        resp = self.member.post("/api/discipline/completions/toggle", json={"routine_id": first, "completion_date": day})
        self.assertFalse(resp.json()["completed"])
        resp = self.member.get("/api/discipline/compliance", params={"date": day})
        self.assertEqual(resp.json()["percent"], 0)

    def test_completion_unknown_routine(self) -> None:
        resp = self.member.post("/api/discipline/completions/toggle", json={"routine_id": "missing"})
        self.assertEqual(resp.status_code, 404)

    def test_reorder(self) -> None:
        ids = [r["id"] for r in self.routines]
        resp = self.admin.put(
            "/api/discipline/routines/reorder",
            json={"routine_type": "morning", "routine_ids": list(reversed(ids))},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual([r["id"] for r in resp.json()], list(reversed(ids)))

        resp = self.admin.put(
            "/api/discipline/routines/reorder",
            json={"routine_type": "morning", "routine_ids": ids[:2]},
        )
        self.assertEqual(resp.status_code, 400)

        self.admin.put("/api/discipline/routines/reorder", json={"routine_type": "morning", "routine_ids": ids})

    def test_ics_schedules_routines_back_to_back(self) -> None:
        resp = self.member.get("/api/discipline/export.ics", params={"routine_type": "morning", "date": "2026-02-10"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('filename="morning-discipline-schedule.ics"', resp.headers["content-disposition"])
        body = resp.text
        self.assertEqual(body.count("BEGIN:VEVENT"), 3)
        self.assertIn("DTSTART:20260210T053000Z", body)
        self.assertIn("DTEND:20260210T053200Z", body)
        self.assertIn("DTSTART:20260210T053200Z", body)
        self.assertIn("DTEND:20260210T054700Z", body)
        self.assertIn("Mark Complete:", body)

    def test_ics_uses_member_timezone(self) -> None:
        resp = self.member.get(
            "/api/discipline/export.ics",
            params={"routine_type": "morning", "date": "2026-02-10", "tz": "America/New_York"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIn("DTSTART:20260210T103000Z", resp.text)
        self.assertIn("DTEND:20260210T103200Z", resp.text)
        self.assertNotIn("DTSTART:20260210T053000Z", resp.text)

        resp = self.member.get("/api/discipline/export.ics", params={"routine_type": "morning", "tz": "Mars/Olympus"})
        self.assertEqual(resp.status_code, 400)

    def test_parse_time_string(self) -> None:
        from coachhub.discipline.schedule import parse_time_string

        self.assertEqual(parse_time_string("5:30 AM"), (5, 30))
        self.assertEqual(parse_time_string("9:15 pm"), (21, 15))
        self.assertEqual(parse_time_string("12:00 AM"), (0, 0))
        self.assertEqual(parse_time_string("whenever"), (8, 0))


class TestDisciplineTemplates(AppTestCase):
    with_member = False

    def _template(self) -> dict:
        resp = self.admin.post(
            "/api/discipline/templates",
            json={
                "name": "Military Morning",
                "category": "military",
                "routines": [
                    {"routine_type": "morning", "time_slot": "4:30 AM", "action_text": "Up, no snooze", "display_order": 0},
                    {"routine_type": "morning", "time_slot": "4:35 AM", "action_text": "Pushups", "display_order": 1},
                    {"routine_type": "evening", "time_slot": "9:00 PM", "action_text": "Lay out clothes"},
                ],
            },
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_apply_template_replaces_routines(self) -> None:
        self.admin.post(
            "/api/discipline/routines",
            json={"routine_type": "morning", "time_slot": "6:00 AM", "action_text": "Old habit"},
        )
        template = self._template()
        resp = self.admin.post(f"/api/discipline/templates/{template['id']}/apply", json={"replace": True})
        self.assertEqual(resp.status_code, 200, resp.text)
        texts = [r["action_text"] for r in resp.json()]
        self.assertNotIn("Old habit", texts)
        self.assertIn("Pushups", texts)
        self.assertEqual(len(texts), 3)

        resp = self.admin.post(f"/api/discipline/templates/{template['id']}/apply", json={"replace": False})
        self.assertEqual(len(resp.json()), 6)

    def test_empty_template_cannot_be_applied(self) -> None:
        template = self.admin.post("/api/discipline/templates", json={"name": "Empty"}).json()
        resp = self.admin.post(f"/api/discipline/templates/{template['id']}/apply", json={})
        self.assertEqual(resp.status_code, 400)

    def test_substeps_grouped_and_ordered(self) -> None:
        template = self._template()
        for index, text in ((0, "Feet on floor"), (1, "Set of 20"), (0, "Say thank you")):
            resp = self.admin.post(
                "/api/discipline/substeps",
                json={"template_id": template["id"], "routine_index": index, "action_text": text},
            )
            self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.admin.get(f"/api/discipline/templates/{template['id']}/substeps")
        groups = resp.json()["groups"]
        self.assertEqual([s["action_text"] for s in groups["0"]], ["Feet on floor", "Say thank you"])
        self.assertEqual([s["step_order"] for s in groups["0"]], [0, 1])
        self.assertEqual(len(groups["1"]), 1)

        step = groups["1"][0]
        resp = self.admin.patch(f"/api/discipline/substeps/{step['id']}", json={"duration_seconds": 45})
        self.assertEqual(resp.json()["duration_seconds"], 45)
        self.assertEqual(self.admin.delete(f"/api/discipline/substeps/{step['id']}").status_code, 200)
        self.assertEqual(self.admin.patch(f"/api/discipline/substeps/{step['id']}", json={}).status_code, 404)

        resp = self.admin.post(
            "/api/discipline/substeps",
            json={"template_id": "missing", "routine_index": 0, "action_text": "x"},
        )
        self.assertEqual(resp.status_code, 404)

    def test_template_update_and_delete(self) -> None:
        template = self._template()
        resp = self.admin.patch(f"/api/discipline/templates/{template['id']}", json={"is_active": False})
        self.assertFalse(resp.json()["is_active"])
        active = self.admin.get("/api/discipline/templates", params={"active_only": True}).json()
        self.assertNotIn(template["id"], [t["id"] for t in active])
        self.assertEqual(self.admin.delete(f"/api/discipline/templates/{template['id']}").status_code, 200)
        self.assertEqual(self.admin.get(f"/api/discipline/templates/{template['id']}").status_code, 404)
