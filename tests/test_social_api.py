# -*- coding: utf-8 -*-

from __future__ import annotations

import csv
import io
import json
from unittest.mock import patch

from fastapi import HTTPException

from support import AppTestCase, llm_reply

AUDIT_REPLY = {
    "score": 42,
    "summary": "Bio is vague and there is no clear CTA.",
    "recommendations": [
        {"title": "Rewrite bio", "priority": "high"},
        {"id": "pin", "title": "Pin your best transformation", "priority": "medium"},
        "not a recommendation",
        {"title": "Add highlights", "priority": "low"},
    ],
}


class TestSocialApi(AppTestCase):
    llm_api_key = "test-key"

    def test_member_locked_out(self) -> None:
        self.assertEqual(self.member.get("/api/social/prospects").status_code, 403)

    def test_competitor_requires_handle_and_platform(self) -> None:
        with patch("coachhub.agent_service.call_agent") as mocked:
            resp = self.admin.post("/api/functions/social-competitor-analyze", json={"platform": "instagram"})
        self.assertEqual(resp.status_code, 400)
        mocked.assert_not_called()

    def test_competitor_analysis_stored(self) -> None:
        analysis = {"summary": "Strong hooks", "content_gaps": ["faith"], "steal_this": ["POV reels"]}
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(analysis))) as mocked:
            resp = self.admin.post(
                "/api/functions/social-competitor-analyze",
                json={
                    "competitor_handle": "@iron_pastor",
                    "platform": "tiktok",
                    "pasted_content": ["Caption one", "  "],
                },
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        stored = resp.json()
        self.assertEqual(stored["competitor_handle"], "iron_pastor")
        self.assertEqual(stored["analysis_data"]["summary"], "Strong hooks")
        self.assertIn("Caption one", mocked.call_args[0][0][1]["content"])

        listed = self.admin.get("/api/social/competitors", params={"platform": "tiktok"}).json()
        self.assertIn(stored["id"], [a["id"] for a in listed])
        self.assertEqual(self.admin.get("/api/social/competitors", params={"platform": "youtube"}).json(), [])

        self.assertEqual(self.admin.delete(f"/api/social/competitors/{stored['id']}").status_code, 200)
        self.assertEqual(self.admin.delete(f"/api/social/competitors/{stored['id']}").status_code, 404)

    def test_profile_audit_checklist_scoring(self) -> None:
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(AUDIT_REPLY))):
            resp = self.admin.post(
                "/api/functions/social-profile-audit",
                json={"platform": "instagram", "handle": "domdifferent", "has_link_in_bio": True},
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        audit = resp.json()
        self.assertEqual(audit["score"], 42)
        self.assertEqual(audit["completed_items"], [])
        self.assertEqual([r["id"] for r in audit["recommendations"]], ["rec-1", "pin", "rec-4"])

        resp = self.admin.post(f"/api/social/audits/{audit['id']}/toggle-item", json={"item_id": "pin"})
        self.assertEqual(resp.json()["completed_items"], ["pin"])
        self.assertEqual(resp.json()["score"], 33)

        resp = self.admin.post(f"/api/social/audits/{audit['id']}/toggle-item", json={"item_id": "rec-1"})
        self.assertEqual(resp.json()["score"], 67)

        resp = self.admin.post(f"/api/social/audits/{audit['id']}/toggle-item", json={"item_id": "pin"})
        self.assertEqual(resp.json()["completed_items"], ["rec-1"])
        self.assertEqual(resp.json()["score"], 33)

        self.assertEqual(self.admin.get(f"/api/social/audits/{audit['id']}").json()["score"], 33)
        self.assertEqual(self.admin.get("/api/social/audits", params={"platform": "instagram"}).json()[0]["id"], audit["id"])

    def test_audit_rejects_unknown_checklist_item(self) -> None:
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(AUDIT_REPLY))):
            audit = self.admin.post("/api/functions/social-profile-audit", json={"platform": "tiktok"}).json()
        for item_id in ("bogus-1", "bogus-2", "bogus-3", "bogus-4"):
            resp = self.admin.post(f"/api/social/audits/{audit['id']}/toggle-item", json={"item_id": item_id})
            self.assertEqual(resp.status_code, 400)
        stored = self.admin.get(f"/api/social/audits/{audit['id']}").json()
        self.assertEqual(stored["completed_items"], [])
        self.assertEqual(stored["score"], 42)

        for item_id in ("rec-1", "pin", "rec-4"):
            resp = self.admin.post(f"/api/social/audits/{audit['id']}/toggle-item", json={"item_id": item_id})
        self.assertEqual(resp.json()["score"], 100)

    def test_audit_rejects_unknown_platform(self) -> None:
        resp = self.admin.post("/api/functions/social-profile-audit", json={"platform": "myspace"})
        self.assertEqual(resp.status_code, 422)

    def test_prospect_pipeline(self) -> None:
        resp = self.admin.post(
            "/api/social/prospects",
            json={"handle": "@faithfit_coach", "name": "Jordan", "follower_count": 12000, "niche": "faith fitness"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        prospect = resp.json()
        self.assertEqual(prospect["handle"], "faithfit_coach")
        self.assertEqual(prospect["status"], "prospect")
        self.assertIsNone(prospect["last_contacted_at"])

        resp = self.admin.put(f"/api/social/prospects/{prospect['id']}/status", json={"status": "researching"})
        self.assertIsNone(resp.json()["last_contacted_at"])
        resp = self.admin.put(f"/api/social/prospects/{prospect['id']}/status", json={"status": "reached_out"})
        self.assertEqual(resp.json()["status"], "reached_out")
        self.assertTrue(resp.json()["last_contacted_at"])

        resp = self.admin.put(f"/api/social/prospects/{prospect['id']}/status", json={"status": "ghosted"})
        self.assertEqual(resp.status_code, 422)

        resp = self.admin.patch(f"/api/social/prospects/{prospect['id']}", json={"notes": "Met at conference"})
        self.assertEqual(resp.json()["notes"], "Met at conference")

        counts = self.admin.get("/api/social/prospects/status-counts").json()
        self.assertGreaterEqual(counts["reached_out"], 1)
        self.assertEqual(counts["all"], sum(v for k, v in counts.items() if k != "all"))

        resp = self.admin.get("/api/social/prospects", params={"status": "reached_out"})
        self.assertIn(prospect["id"], [p["id"] for p in resp.json()])

        resp = self.admin.get("/api/social/prospects/export.csv")
        self.assertEqual(resp.status_code, 200)
        rows = list(csv.DictReader(io.StringIO(resp.text)))
        row = next(r for r in rows if r["Handle"] == "faithfit_coach")
        self.assertEqual(row["Followers"], "12000")
        self.assertEqual(row["Status"], "reached_out")

        self.assertEqual(self.admin.delete(f"/api/social/prospects/{prospect['id']}").status_code, 200)
        self.assertEqual(self.admin.get(f"/api/social/prospects/{prospect['id']}").status_code, 404)

    def test_collab_dm_saved_on_prospect(self) -> None:
        prospect = self.admin.post(
            "/api/social/prospects",
            json={"handle": "gritmom", "name": "Alexis", "niche": "postpartum strength", "collab_idea": "Joint workout"},
        ).json()
        dm = {"short_dm": "Love what you're building.", "long_dm": "Hey Alexis...", "follow_up": "Circling back."}
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(dm))) as mocked:
            resp = self.admin.post(
                "/api/functions/social-engagement-coach",
                json={"mode": "collab_dm", "prospect_id": prospect["id"]},
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        payload = resp.json()
        self.assertEqual(payload["result"]["short_dm"], dm["short_dm"])
        self.assertEqual(payload["prospect"]["outreach_dm"], dm)
        prompt = mocked.call_args[0][0][1]["content"]
        self.assertIn("gritmom", prompt)
        self.assertIn("Joint workout", prompt)

        stored = self.admin.get(f"/api/social/prospects/{prospect['id']}").json()
        self.assertEqual(stored["outreach_dm"], dm)

    def test_comment_reply_requires_comment(self) -> None:
        resp = self.admin.post("/api/functions/social-engagement-coach", json={"mode": "comment_reply"})
        self.assertEqual(resp.status_code, 400)

    def test_engagement_strategy(self) -> None:
        plan = {"daily_actions": ["Reply to 20 comments"], "growth_tip": "Go live Sunday"}
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(plan))):
            resp = self.admin.post(
                "/api/functions/social-engagement-coach",
                json={"mode": "engagement_strategy", "current_followers": "4k"},
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["result"]["growth_tip"], "Go live Sunday")
        self.assertIsNone(resp.json()["prospect"])

    def test_invalid_mode(self) -> None:
        from coachhub.social.coach import coach

        with self.assertRaises(HTTPException) as ctx:
            coach("dance", {})
        self.assertEqual(ctx.exception.status_code, 400)
        resp = self.admin.post("/api/functions/social-engagement-coach", json={"mode": "dance"})
        self.assertEqual(resp.status_code, 422)
