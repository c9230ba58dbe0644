# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from coachhub.nutrition.grocery import categorize_ingredient, grocery_list, render_text
from coachhub.nutrition.recommend import calculate_targets, dietary_tags, recommend, score_template

from support import AppTestCase

INTAKE = {
    "goal": "Lose fat",
    "activity_level": "moderate",
    "weight": "200 lbs",
    "height": "5'10\"",
    "age": 30,
}


class TestGrocery(unittest.TestCase):
    def test_categorize(self) -> None:
        self.assertEqual(categorize_ingredient("Chicken breast"), "Proteins")
        self.assertEqual(categorize_ingredient("Bell peppers"), "Vegetables")
        self.assertEqual(categorize_ingredient("Brown rice"), "Grains")
        self.assertEqual(categorize_ingredient("Olive oil"), "Pantry")
        self.assertEqual(categorize_ingredient("Xanthan gum"), "Other")

    def test_aggregates_by_name(self) -> None:
        meals = [
            {"ingredients": [{"item": "Chicken breast", "amount": "6 oz"}, {"item": "Brown rice", "amount": "1 cup"}]},
            {"ingredients": [{"item": "chicken Breast ", "amount": "8 oz"}, {"item": "", "amount": "1"}]},
            {"ingredients": None},
        ]
        grouped = grocery_list(meals)
        self.assertEqual(list(grouped), ["Proteins", "Grains"])
        chicken = grouped["Proteins"][0]
        self.assertEqual(chicken["item"], "Chicken breast")
        self.assertEqual(chicken["amounts"], ["6 oz", "8 oz"])

        text = render_text(grouped, 2)
        self.assertTrue(text.startswith("Week 2 Grocery List"))
        self.assertIn("- Chicken breast: (6 oz + 8 oz)", text)
        self.assertIn("- Brown rice: 1 cup", text)


class TestRecommend(unittest.TestCase):
    def test_calculate_targets(self) -> None:
        targets = calculate_targets(INTAKE)
        self.assertEqual(targets["bmr"], 1873)
        self.assertEqual(targets["tdee"], 2904)
        self.assertEqual(targets["recommended_category"], "Fat Loss - Aggressive")
        self.assertEqual(targets["target_calories"], 2904 - 750)

        targets = calculate_targets({"goal": "Build muscle", "activity_level": "sedentary"})
        self.assertEqual(targets["recommended_category"], "Muscle Building - Lean")
        self.assertEqual(targets["target_calories"], targets["tdee"] + 300)

        self.assertEqual(calculate_targets({})["recommended_category"], "Recomposition")

    def test_intake_activity_spellings_agree(self) -> None:
        light = calculate_targets({**INTAKE, "activity_level": "light"})
        self.assertEqual(calculate_targets({**INTAKE, "activity_level": "lightly_active"}), light)
        self.assertEqual(calculate_targets({**INTAKE, "activity_level": "Lightly Active"}), light)
        self.assertLess(light["tdee"], calculate_targets(INTAKE)["tdee"])
        self.assertEqual(
            calculate_targets({**INTAKE, "activity_level": "moderately_active"})["tdee"],
            calculate_targets(INTAKE)["tdee"],
        )

        mass = calculate_targets({"goal": "Build muscle", "activity_level": "Very Active"})
        self.assertEqual(mass["recommended_category"], "Muscle Building - Mass")

    def test_score_never_prefers_a_missing_range(self) -> None:
        inside = score_template({"calorie_range_min": 1800, "calorie_range_max": 2600}, 2000)
        near = score_template({"calorie_range_min": 2050, "calorie_range_max": 2100}, 2000)
        far = score_template({"calorie_range_min": 2500, "calorie_range_max": 2700}, 2000)
        self.assertEqual(inside["score"], 100)
        self.assertEqual(near["score"], 95)
        self.assertEqual(far["score"], 50)
        self.assertGreater(inside["score"], near["score"])
        self.assertGreater(near["score"], far["score"])
        self.assertEqual(inside["match_quality"], "Excellent Match")
        self.assertEqual(far["match_quality"], "Fair Match")
        self.assertEqual(score_template({"calorie_range_min": 4000, "calorie_range_max": 4500}, 2000)["score"], 0)

    def test_dietary_tags(self) -> None:
        self.assertEqual(dietary_tags("Gluten free, keto/low-carb, low-carb, none"), ["gluten-free", "keto"])
        self.assertEqual(dietary_tags(None), [])

    def test_restriction_filter_falls_back(self) -> None:
        category = {"id": "c1", "name": "Recomposition"}
        templates = [
            {"id": "t1", "category_id": "c1", "calorie_range_min": 0, "calorie_range_max": 5000, "dietary_tags": []},
            {"id": "t2", "category_id": "c1", "calorie_range_min": 0, "calorie_range_max": 100, "dietary_tags": ["vegetarian"]},
        ]
        result = recommend(templates, [category], {"dietary_restrictions": "vegetarian"})
        self.assertEqual(result["template"]["id"], "t2")
        result = recommend(templates, [category], {"dietary_restrictions": "dairy-free"})
        self.assertEqual(result["template"]["id"], "t1")

    def test_no_category(self) -> None:
        result = recommend([], [], INTAKE)
        self.assertIsNone(result["template"])
        self.assertEqual(result["targets"]["recommended_category"], "Fat Loss - Aggressive")


class TestNutritionApi(AppTestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        resp = cls.admin.post("/api/nutrition/categories", json={"name": "Fat Loss - Aggressive"})
        assert resp.status_code == 200, resp.text
        cls.category = resp.json()
        cls.templates = {}
        for name, low, high in (("Lean Cut", 2000, 2300), ("Upper Cut", 2200, 2600), ("Crash", 1500, 1800)):
            resp = cls.admin.post(
                "/api/nutrition/templates",
                json={
                    "category_id": cls.category["id"],
                    "name": name,
                    "goal_type": "fat_loss",
                    "calorie_range_min": low,
                    "calorie_range_max": high,
                },
            )
            assert resp.status_code == 200, resp.text
            cls.templates[name] = resp.json()

    def test_duplicate_category(self) -> None:
        resp = self.admin.post("/api/nutrition/categories", json={"name": "Fat Loss - Aggressive"})
        self.assertEqual(resp.status_code, 409)

    def test_invalid_calorie_range(self) -> None:
        resp = self.admin.post(
            "/api/nutrition/templates",
            json={"name": "Backwards", "goal_type": "fat_loss", "calorie_range_min": 2500, "calorie_range_max": 2000},
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.admin.patch(
            f"/api/nutrition/templates/{self.templates['Crash']['id']}",
            json={"calorie_range_min": 1900},
        )
        self.assertEqual(resp.status_code, 400)

    def test_member_cannot_create_templates(self) -> None:
        resp = self.member.post(
            "/api/nutrition/templates",
            json={"name": "Nope", "goal_type": "fat_loss", "calorie_range_min": 1, "calorie_range_max": 2},
        )
        self.assertEqual(resp.status_code, 403)

    def test_days_meals_and_grocery_list(self) -> None:
        template_id = self.templates["Lean Cut"]["id"]
        monday = self.admin.post(
            f"/api/nutrition/templates/{template_id}/days", json={"day_number": 1, "day_name": "Monday"}
        ).json()
        tuesday = self.admin.post(
            f"/api/nutrition/templates/{template_id}/days", json={"day_number": 2, "day_name": "Tuesday"}
        ).json()
        week_two = self.admin.post(
            f"/api/nutrition/templates/{template_id}/days",
            json={"day_number": 1, "day_name": "Monday", "week_number": 2},
        ).json()
        for day, amount in ((monday, "6 oz"), (tuesday, "8 oz"), (week_two, "1 lb")):
            resp = self.admin.post(
                f"/api/nutrition/days/{day['id']}/meals",
                json={
                    "meal_type": "lunch",
                    "meal_name": "Chicken bowl",
                    "calories": 550,
                    "ingredients": [{"item": "Chicken breast", "amount": amount}, {"item": "Spinach", "amount": "1 cup"}],
                },
            )
            self.assertEqual(resp.status_code, 200, resp.text)

        resp = self.member.get(f"/api/nutrition/templates/{template_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([d["day_name"] for d in resp.json()["days"]], ["Monday", "Tuesday", "Monday"])

        resp = self.member.get(f"/api/nutrition/templates/{template_id}/grocery-list", params={"week": 1})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["total_items"], 2)
        self.assertEqual(data["categories"]["Proteins"][0]["amounts"], ["6 oz", "8 oz"])
        self.assertEqual(data["categories"]["Vegetables"][0]["amounts"], ["1 cup", "1 cup"])

        resp = self.member.get(f"/api/nutrition/templates/{template_id}/grocery-list.txt", params={"week": 2})
        self.assertIn('filename="week-2-grocery-list.txt"', resp.headers["content-disposition"])
        self.assertIn("- Chicken breast: 1 lb", resp.text)

        resp = self.admin.delete(f"/api/nutrition/days/{tuesday['id']}")
        self.assertEqual(resp.status_code, 200)
        resp = self.admin.post(f"/api/nutrition/days/{tuesday['id']}/meals", json={"meal_type": "snack", "meal_name": "x"})
        self.assertEqual(resp.status_code, 404)

    def test_recommend_from_saved_intake(self) -> None:
        resp = self.member.put("/api/onboarding/intake", json=INTAKE)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["intake_completed_at"])

        resp = self.member.post("/api/nutrition/recommend", json={})
        self.assertEqual(resp.status_code, 200, resp.text)
        rec = resp.json()
        self.assertEqual(rec["category"]["id"], self.category["id"])
        self.assertEqual(rec["template"]["name"], "Lean Cut")
        self.assertEqual(rec["score"], 100)
        self.assertEqual(len(rec["scored_templates"]), 3)
        scores = [s["score"] for s in rec["scored_templates"]]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_recommend_without_matching_category(self) -> None:
        resp = self.member.post("/api/nutrition/recommend", json={"profile": {"goal": "Build muscle"}})
        self.assertEqual(resp.status_code, 200)
        rec = resp.json()
        self.assertIsNone(rec["template"])
        self.assertEqual(rec["targets"]["recommended_category"], "Muscle Building - Lean")
