# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import random
from unittest.mock import patch

from support import AppTestCase, llm_reply


def _post(**overrides) -> dict:
    body = {
        "category": "faith",
        "mode": "done_for_you",
        "title": "Grace in the gym",
        "platforms": ["Instagram"],
        "hook": "I used to think discipline was punishment.",
        "talking_points": ["Point one", "Point two"],
        "strategy_type": "value",
        "hashtags": ["#faith"],
    }
    body.update(overrides)
    return body


class TestContentApi(AppTestCase):
    llm_api_key = "test-key"

    def test_create_filter_and_status(self) -> None:
        resp = self.admin.post("/api/content/posts", json=_post(category="hustle", title="Hustle post"))
        self.assertEqual(resp.status_code, 200, resp.text)
        post = resp.json()
        self.assertEqual(post["status"], "fresh")
        self.assertIsNone(post["used_at"])
        self.assertEqual(post["talking_points"], ["Point one", "Point two"])

        resp = self.admin.get("/api/content/posts", params={"category": "hustle"})
        self.assertEqual([p["id"] for p in resp.json()], [post["id"]])

        resp = self.admin.get("/api/content/posts", params={"category": "all", "status": "fresh"})
        self.assertIn(post["id"], [p["id"] for p in resp.json()])

        resp = self.admin.put(f"/api/content/posts/{post['id']}/status", json={"status": "used"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "used")
        self.assertTrue(resp.json()["used_at"])

        resp = self.admin.get("/api/content/posts", params={"category": "hustle", "status": "fresh"})
        self.assertEqual(resp.json(), [])

        resp = self.admin.put(f"/api/content/posts/{post['id']}/status", json={"status": "fresh"})
        self.assertIsNone(resp.json()["used_at"])

    def test_update_and_delete(self) -> None:
        post = self.admin.post("/api/content/posts", json=_post()).json()

        resp = self.admin.patch(f"/api/content/posts/{post['id']}", json={"title": "New title", "cta": None})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "New title")
        self.assertEqual(resp.json()["hook"], post["hook"])

        resp = self.admin.delete(f"/api/content/posts/{post['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.admin.get(f"/api/content/posts/{post['id']}").status_code, 404)
        self.assertEqual(self.admin.delete(f"/api/content/posts/{post['id']}").status_code, 404)

    def test_invalid_category_rejected(self) -> None:
        resp = self.admin.post("/api/content/posts", json=_post(category="cooking"))
        self.assertEqual(resp.status_code, 422)

    def test_strategy_mix(self) -> None:
        from coachhub.content.strategy import strategy_mix

        posts = [{"strategy_type": "value"}] * 4 + [{"strategy_type": "promo"}]
        mix = strategy_mix(posts)
        self.assertEqual(mix["promo_rate"], 20)
        self.assertEqual(mix["strategy_score"], 100)

        mix = strategy_mix([{"strategy_type": "value"}] * 3 + [{"strategy_type": "promo"}] * 2)
        self.assertEqual(mix["promo_rate"], 40)
        self.assertEqual(mix["strategy_score"], 0)

        mix = strategy_mix([])
        self.assertEqual((mix["total"], mix["promo_rate"], mix["strategy_score"]), (0, 0, 100))

        resp = self.admin.get("/api/content/strategy-mix")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(set(resp.json()["counts"]), {"hot_take", "trending", "story", "value", "engagement", "promo"})

    def test_surprise_resolution(self) -> None:
        from coachhub.content.generator import resolve_choices

        category, strategy = resolve_choices("surprise", "surprise", random.Random(7))
        self.assertNotEqual(category, "surprise")
        self.assertNotEqual(strategy, "surprise")
        self.assertEqual(resolve_choices("nonsense", "bogus"), ("faith", "value"))

    def test_generate_ideas_saves_fresh_posts(self) -> None:
        ideas = [
            {"title": "Idea one", "hook": "Hook one", "platforms": ["TikTok"], "talking_points": ["a", "b"]},
            {"title": "Idea two", "hook": "Hook two", "hashtags": "#single"},
            {"title": "No hook here"},
        ]
        reply = llm_reply("Here you go:\n```json\n" + json.dumps(ideas) + "\n```")
        with patch("coachhub.agent_service.call_agent", return_value=reply):
            resp = self.admin.post(
                "/api/functions/generate-content-ideas",
                json={"category": "training", "strategy_type": "story", "save": True},
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        payload = resp.json()
        self.assertEqual(payload["category"], "training")
        self.assertEqual(payload["strategy_type"], "story")
        self.assertEqual([i["title"] for i in payload["ideas"]], ["Idea one", "Idea two"])
        self.assertEqual(payload["ideas"][1]["hashtags"], ["#single"])
        self.assertEqual(len(payload["saved"]), 2)
        self.assertTrue(all(p["status"] == "fresh" for p in payload["saved"]))

    def test_generate_ideas_unparseable_reply(self) -> None:
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply("sorry, no ideas today")):
            resp = self.admin.post("/api/functions/generate-content-ideas", json={"category": "faith"})
        self.assertEqual(resp.status_code, 502)

    def test_generate_script_from_post(self) -> None:
        post = self.admin.post("/api/content/posts", json=_post(category="discipline", title="5am club")).json()
        script = {
            "title": "Why I wake up at 5am",
            "script": {
                "approach": "Raw morning routine",
                "hook": {"what_to_say": "Nobody is coming to save you."},
                "body": [{"section": "The why", "what_to_say": "I used to sleep till noon."}],
                "cta": {"what_to_say": "Follow for more."},
            },
        }
        with patch("coachhub.agent_service.call_agent", return_value=llm_reply(json.dumps(script))) as mocked:
            resp = self.admin.post(
                "/api/functions/generate-content-script",
                json={"content_post_id": post["id"], "platform": "tiktok"},
            )
        self.assertEqual(resp.status_code, 200, resp.text)
        payload = resp.json()
        self.assertEqual(payload["title"], "Why I wake up at 5am")
        self.assertEqual(payload["category"], "discipline")
        self.assertEqual(payload["content_post_id"], post["id"])
        self.assertEqual(payload["script_data"]["approach"], "Raw morning routine")
        prompt = mocked.call_args[0][0][1]["content"]
        self.assertIn("5am club", prompt)
        self.assertIn(post["hook"], prompt)

    def test_script_text_export(self) -> None:
        body = {
            "title": "My First Script",
            "platform": "instagram",
            "content_type": "Reel",
            "script_data": {
                "hook": {"what_to_say": "Stop scrolling."},
                "body": [{"section": "story", "what_to_say": "Here is what happened."}],
                "hashtags": ["#faith", "#fitness"],
            },
        }
        resp = self.admin.post("/api/content/scripts/export.txt", json=body)
        self.assertEqual(resp.status_code, 200)
        self.assertIn('filename="my-first-script.txt"', resp.headers["content-disposition"])
        self.assertIn('Say: "Stop scrolling."', resp.text)
        self.assertIn("--- STORY ---", resp.text)

    def test_script_export_with_plain_string_parts(self) -> None:
        body = {
            "title": "Loose Reply",
            "script_data": {"hook": "Stop scrolling.", "body": ["I was locked up."], "cta": "Follow.", "hashtags": [2026]},
        }
        resp = self.admin.post("/api/content/scripts/export.txt", json=body)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIn('Say: "Stop scrolling."', resp.text)
        self.assertIn("Script: I was locked up.", resp.text)
        self.assertIn("#2026", resp.text)

    def test_posts_csv_export(self) -> None:
        self.admin.post("/api/content/posts", json=_post(title="Comma, in title"))
        resp = self.admin.get("/api/content/posts/export.csv", params={"category": "faith"})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/csv"))
        self.assertIn('"Comma, in title"', resp.text)
        self.assertIn("Point one; Point two", resp.text)
