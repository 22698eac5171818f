# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient


class TestApiFlow(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="caltrack-test-"))
        os.environ["CALTRACK_DATA_ROOT"] = str(cls._tmp)
        os.environ["CALTRACK_DB_PATH"] = str(cls._tmp / "caltrack.db")
        os.environ["CALTRACK_JWT_SECRET"] = "test-secret"

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name == "caltrack" or name.startswith("caltrack."):
                sys.modules.pop(name, None)

        from caltrack.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)
        resp = cls.client.post(
            "/api/auth/register",
            json={"username": "dana", "email": "dana@example.com", "password": "password123"},
        )
        assert resp.status_code == 201, resp.text
        cls.headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _register(self, username: str) -> dict:
        resp = self.client.post(
            "/api/auth/register",
            json={"username": username, "email": f"{username}@example.com", "password": "password123"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    def test_health_is_public(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_auth_required(self) -> None:
        resp = TestClient(self.client.app).get("/api/stats/daily/2024-03-01")
        self.assertEqual(resp.status_code, 401)
        self.assertIn("message", resp.json()["error"])

    def test_bad_token_rejected(self) -> None:
        resp = self.client.get("/api/users/me", headers={"Authorization": "Bearer not.a.token"})
        self.assertEqual(resp.status_code, 401)

    def test_duplicate_registration(self) -> None:
        resp = self.client.post(
            "/api/auth/register",
            json={"username": "dana", "email": "dana@example.com", "password": "password123"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["message"], "User already exists")

    def test_login(self) -> None:
        ok = self.client.post("/api/auth/login", json={"email": "dana@example.com", "password": "password123"})
        self.assertEqual(ok.status_code, 200)
        self.assertTrue(ok.json()["token"])
        bad = self.client.post("/api/auth/login", json={"email": "dana@example.com", "password": "wrong-pass"})
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.json()["error"]["message"], "Invalid credentials")

    def test_daily_summary_with_goal(self) -> None:
        headers = self._register("erin")
        resp = self.client.put("/api/users/me", json={"daily_calorie_goal": 2000, "daily_protein_goal": 120}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["daily_protein_goal"], 120)

        for calories in (500, 300):
            resp = self.client.post(
                "/api/foods/entries",
                json={"food_name": "meal", "quantity_g": 250, "calories": calories, "protein_g": 20, "meal_type": "lunch", "date": "2024-03-01"},
                headers=headers,
            )
            self.assertEqual(resp.status_code, 201, resp.text)
        resp = self.client.post(
            "/api/activities/entries",
            json={"activity_id": 2, "quantity": 2, "calories_burned": 200, "date": "2024-03-01"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["entry"]["activity_name"], "Running")

        resp = self.client.get("/api/stats/daily/2024-03-01", headers=headers)
        self.assertEqual(resp.status_code, 200)
        summary = resp.json()["summary"]
        self.assertEqual(summary["calories_consumed"], 800)
        self.assertEqual(summary["calories_burned"], 200)
        self.assertEqual(summary["net_calories"], 600)
        self.assertEqual(summary["calories_remaining"], 1400)
        self.assertEqual(summary["macros"]["protein_g"], 40)
        self.assertEqual(summary["macro_goals"]["protein_g"], 120)
        self.assertEqual(summary["food_count"], 2)
        self.assertEqual(summary["activity_count"], 1)

    def test_daily_summary_empty_day(self) -> None:
        resp = self.client.get("/api/stats/daily/2030-01-01", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        summary = resp.json()["summary"]
        self.assertEqual(summary["calories_consumed"], 0)
        self.assertEqual(summary["net_calories"], 0)
        self.assertEqual(summary["calories_remaining"], 2000)

    def test_daily_summary_rejects_bad_date(self) -> None:
        resp = self.client.get("/api/stats/daily/yesterday", headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["details"][0]["field"], "summary_date")

    def test_weekly_requires_both_bounds(self) -> None:
        resp = self.client.get("/api/stats/weekly?start_date=2024-03-01", headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["message"], "start_date and end_date are required")

    def test_weekly_rejects_reversed_range(self) -> None:
        resp = self.client.get("/api/stats/weekly?start_date=2024-03-07&end_date=2024-03-01", headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["message"], "start_date must not be after end_date")

    def test_weekly_summary(self) -> None:
        headers = self._register("fran")
        self.client.post(
            "/api/foods/entries",
            json={"food_name": "toast", "quantity_g": 80, "calories": 300, "date": "2024-04-01"},
            headers=headers,
        )
        self.client.post(
            "/api/activities/entries",
            json={"activity_id": 3, "quantity": 2, "date": "2024-04-02"},
            headers=headers,
        )
        resp = self.client.get("/api/stats/weekly?start_date=2024-04-01&end_date=2024-04-07", headers=headers)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual([d["date"] for d in body["daily"]], ["2024-04-01", "2024-04-02"])
        self.assertEqual(body["totals"]["calories_burned"], 100)
        self.assertEqual(body["averages"]["calories_consumed"], 300)
        self.assertEqual(body["averages"]["calories_burned"], 100)

    def test_food_entry_validation(self) -> None:
        resp = self.client.post(
            "/api/foods/entries",
            json={"food_name": "bad", "quantity_g": -5, "calories": 10, "date": "2024-03-01"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        fields = [d["field"] for d in resp.json()["error"]["details"]]
        self.assertIn("quantity_g", fields)

    def test_blank_food_item_id_is_a_validation_error(self) -> None:
        resp = self.client.post(
            "/api/foods/entries",
            json={"food_item_id": "", "food_name": "x", "quantity_g": 1, "calories": 5, "date": "2024-01-01"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        fields = [d["field"] for d in resp.json()["error"]["details"]]
        self.assertIn("food_item_id", fields)

    def test_food_entry_crud(self) -> None:
        resp = self.client.post(
            "/api/foods/entries",
            json={"food_name": "soup", "quantity_g": 300, "calories": 180, "date": "2024-05-01", "time": "12:30"},
            headers=self.headers,
        )
        entry_id = resp.json()["entry"]["id"]

        resp = self.client.put(f"/api/foods/entries/{entry_id}", json={"meal_type": "dinner"}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["entry"]["meal_type"], "dinner")
        self.assertEqual(resp.json()["entry"]["calories"], 180)

        resp = self.client.get("/api/foods/entries/2024-05-01", headers=self.headers)
        self.assertEqual([e["id"] for e in resp.json()["entries"]], [entry_id])

        other = self._register("gale")
        self.assertEqual(self.client.delete(f"/api/foods/entries/{entry_id}", headers=other).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/foods/entries/{entry_id}", headers=self.headers).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/foods/entries/{entry_id}", headers=self.headers).status_code, 404)

    def test_weight_upsert_and_progress(self) -> None:
        headers = self._register("hale")
        first = self.client.post("/api/weight/entries", json={"weight_kg": 90, "date": "2024-03-01"}, headers=headers)
        self.assertEqual(first.status_code, 201)
        again = self.client.post("/api/weight/entries", json={"weight_kg": 89.5, "date": "2024-03-01"}, headers=headers)
        self.assertEqual(again.status_code, 200)
        self.assertEqual(again.json()["entry"]["id"], first.json()["entry"]["id"])
        self.client.post("/api/weight/entries", json={"weight_kg": 88.0, "date": "2024-03-08"}, headers=headers)

        entries = self.client.get("/api/weight/entries", headers=headers).json()["entries"]
        self.assertEqual([e["weight_kg"] for e in entries], [88.0, 89.5])

        resp = self.client.get("/api/stats/progress", headers=headers)
        self.assertIsNone(resp.json()["progress"])

        resp = self.client.post("/api/weight/goal", json={"target_weight_kg": 80, "target_date": "2024-12-31"}, headers=headers)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(self.client.get("/api/weight/goal", headers=headers).json()["goal"]["target_weight_kg"], 80)

        body = self.client.get("/api/stats/progress?days=10", headers=headers).json()
        self.assertEqual([p["date"] for p in body["weight_entries"]], ["2024-03-01", "2024-03-08"])
        self.assertEqual(body["progress"]["weight_change"], -1.5)
        self.assertEqual(body["progress"]["goal_remaining"], 8.0)

    def test_progress_rejects_bad_days(self) -> None:
        self.assertEqual(self.client.get("/api/stats/progress?days=0", headers=self.headers).status_code, 400)
        self.assertEqual(self.client.get("/api/stats/progress?days=abc", headers=self.headers).status_code, 400)

    def test_unknown_route_uses_error_envelope(self) -> None:
        resp = self.client.get("/api/nope", headers=self.headers)
        self.assertEqual(resp.status_code, 404)
        self.assertIn("message", resp.json()["error"])


if __name__ == "__main__":
    unittest.main()
