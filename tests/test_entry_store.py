# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError as ModelValidationError

from caltrack.activities.models import ActivityEntryCreateRequest, ActivityEntryUpdateRequest
from caltrack.activities.storage import create_entry as create_activity_entry
from caltrack.activities.storage import delete_entry as delete_activity_entry
from caltrack.activities.storage import list_activities
from caltrack.activities.storage import list_entries_for_date as list_activity_entries
from caltrack.activities.storage import update_entry as update_activity_entry
from caltrack.app_db import connect, create_schema
from caltrack.auth.storage import create_user
from caltrack.errors import ConflictError, NotFoundError, ValidationError
from caltrack.foods.models import FoodEntryCreateRequest, FoodEntryUpdateRequest, FoodItemCreateRequest, FoodItemUpdateRequest
from caltrack.foods.storage import (
    create_entry,
    create_item,
    delete_entry,
    list_entries_for_date,
    search_items,
    update_entry,
    update_item_macros,
)
from caltrack.weight.models import WeightEntryCreateRequest
from caltrack.weight.storage import delete_entry as delete_weight_entry
from caltrack.weight.storage import latest_entry, list_entries, upsert_entry


class _StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="caltrack-test-"))
        self.conn = connect(self._tmp / "caltrack.db")
        create_schema(self.conn)
        self.user_id = create_user(self.conn, username="alice", email="Alice@Example.com", password_hash="x")["id"]
        self.other_id = create_user(self.conn, username="bob", email="bob@example.com", password_hash="x")["id"]

    def tearDown(self) -> None:
        self.conn.close()
        shutil.rmtree(self._tmp, ignore_errors=True)


class TestFoodEntries(_StoreTestCase):
    def test_create_defaults_macros_to_zero(self) -> None:
        entry = create_entry(
            self.conn,
            self.user_id,
            FoodEntryCreateRequest(food_name=" Apple ", quantity_g=150, calories=78, meal_type="snack", date="2024-03-01"),
        )
        self.assertEqual(entry.food_name, "Apple")
        self.assertEqual(entry.protein_g, 0)
        self.assertEqual(entry.meal_type.value, "snack")
        self.assertEqual(entry.date, "2024-03-01")

    def test_calories_required_without_item(self) -> None:
        with self.assertRaises(ValidationError):
            create_entry(
                self.conn,
                self.user_id,
                FoodEntryCreateRequest(food_name="mystery", quantity_g=100, date="2024-03-01"),
            )

    def test_nutrients_derived_from_item(self) -> None:
        item, created = create_item(
            self.conn,
            self.user_id,
            FoodItemCreateRequest(name="Oats", calories_per_100g=389, protein_g=16.9, carbs_g=66.3, fat_g=6.9, fiber_g=10.6),
        )
        self.assertTrue(created)
        entry = create_entry(
            self.conn,
            self.user_id,
            FoodEntryCreateRequest(food_item_id=item.id, food_name="Oats", quantity_g=50, date="2024-03-01"),
        )
        self.assertEqual(entry.calories, 194.5)
        self.assertEqual(entry.protein_g, 8.4)
        self.assertEqual(entry.fiber_g, 5.3)

    def test_unknown_item_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            create_entry(
                self.conn,
                self.user_id,
                FoodEntryCreateRequest(food_item_id="nope", food_name="x", quantity_g=1, date="2024-03-01"),
            )

    def test_blank_item_id_is_rejected(self) -> None:
        with self.assertRaises(ModelValidationError):
            FoodEntryCreateRequest(food_item_id="", food_name="x", quantity_g=1, calories=5, date="2024-01-01")

    def test_partial_update_keeps_other_fields(self) -> None:
        entry = create_entry(
            self.conn,
            self.user_id,
            FoodEntryCreateRequest(food_name="Rice", quantity_g=200, calories=260, protein_g=5, meal_type="lunch", date="2024-03-01"),
        )
        updated = update_entry(self.conn, self.user_id, entry.id, FoodEntryUpdateRequest(calories=300))
        self.assertEqual(updated.calories, 300)
        self.assertEqual(updated.protein_g, 5)
        self.assertEqual(updated.meal_type.value, "lunch")

    def test_other_users_entries_are_not_found(self) -> None:
        entry = create_entry(
            self.conn,
            self.user_id,
            FoodEntryCreateRequest(food_name="Rice", quantity_g=200, calories=260, date="2024-03-01"),
        )
        with self.assertRaises(NotFoundError):
            update_entry(self.conn, self.other_id, entry.id, FoodEntryUpdateRequest(calories=1))
        with self.assertRaises(NotFoundError):
            delete_entry(self.conn, self.other_id, entry.id)
        delete_entry(self.conn, self.user_id, entry.id)
        self.assertEqual(list_entries_for_date(self.conn, self.user_id, "2024-03-01"), [])

    def test_entries_for_date_newest_time_first(self) -> None:
        for name, time in (("breakfast", "08:00"), ("dinner", "19:30"), ("lunch", "12:15")):
            create_entry(
                self.conn,
                self.user_id,
                FoodEntryCreateRequest(food_name=name, quantity_g=1, calories=1, date="2024-03-01", time=time),
            )
        names = [e.food_name for e in list_entries_for_date(self.conn, self.user_id, "2024-03-01")]
        self.assertEqual(names, ["dinner", "lunch", "breakfast"])


class TestFoodItems(_StoreTestCase):
    def test_source_id_deduplicates(self) -> None:
        request = FoodItemCreateRequest(name="Banana", calories_per_100g=89, source_id="fs-123")
        first, created_first = create_item(self.conn, self.user_id, request)
        second, created_second = create_item(self.conn, self.other_id, request)
        self.assertTrue(created_first)
        self.assertFalse(created_second)
        self.assertEqual(first.id, second.id)

    def test_search_needs_two_characters(self) -> None:
        create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Banana", calories_per_100g=89))
        create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Bread", calories_per_100g=265))
        self.assertEqual(search_items(self.conn, "b"), [])
        self.assertEqual([i.name for i in search_items(self.conn, "an")], ["Banana"])

    def test_search_treats_wildcards_literally(self) -> None:
        create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Banana", calories_per_100g=89))
        create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Milk 2% fat", calories_per_100g=50))
        self.assertEqual(search_items(self.conn, "%%"), [])
        self.assertEqual(search_items(self.conn, "__"), [])
        self.assertEqual([i.name for i in search_items(self.conn, "2%")], ["Milk 2% fat"])

    def test_existing_source_id_row_is_returned(self) -> None:
        self.conn.execute(
            "INSERT INTO food_items (id, name, calories_per_100g, source_id, created_at) VALUES (?, ?, ?, ?, ?)",
            ("pre-1", "Apple", 52, "fs-9", "2024-01-01T00:00:00.000000Z"),
        )
        item, created = create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Apple", calories_per_100g=60, source_id="fs-9"))
        self.assertFalse(created)
        self.assertEqual(item.id, "pre-1")
        self.assertEqual(item.calories_per_100g, 52)
        count = self.conn.execute("SELECT COUNT(*) FROM food_items WHERE source_id = ?", ("fs-9",)).fetchone()[0]
        self.assertEqual(count, 1)

    def test_blank_source_id_is_rejected(self) -> None:
        with self.assertRaises(ModelValidationError):
            FoodItemCreateRequest(name="Pear", calories_per_100g=57, source_id="")

    def test_macro_correction_by_creator_only(self) -> None:
        item, _ = create_item(self.conn, self.user_id, FoodItemCreateRequest(name="Egg", calories_per_100g=150))
        with self.assertRaises(NotFoundError):
            update_item_macros(self.conn, self.other_id, item.id, FoodItemUpdateRequest(calories_per_100g=155))
        fixed = update_item_macros(self.conn, self.user_id, item.id, FoodItemUpdateRequest(calories_per_100g=155, protein_g=13))
        self.assertEqual(fixed.calories_per_100g, 155)
        self.assertEqual(fixed.protein_g, 13)
        self.assertEqual(fixed.name, "Egg")


class TestActivityEntries(_StoreTestCase):
    def test_catalog_is_seeded(self) -> None:
        names = [a.name for a in list_activities(self.conn)]
        self.assertEqual(names, ["Cycling", "Running", "Swimming", "Walking"])

    def test_calories_default_from_catalog(self) -> None:
        walking = next(a for a in list_activities(self.conn) if a.name == "Walking")
        entry = create_activity_entry(
            self.conn,
            self.user_id,
            ActivityEntryCreateRequest(activity_id=walking.id, quantity=10000, date="2024-03-01"),
        )
        self.assertEqual(entry.calories_burned, 400)
        self.assertEqual(entry.activity_name, "Walking")
        self.assertEqual(entry.unit, "steps")

    def test_unknown_activity_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            create_activity_entry(
                self.conn,
                self.user_id,
                ActivityEntryCreateRequest(activity_id=999, quantity=1, calories_burned=1, date="2024-03-01"),
            )

    def test_update_is_owner_scoped(self) -> None:
        cycling = next(a for a in list_activities(self.conn) if a.name == "Cycling")
        entry = create_activity_entry(
            self.conn,
            self.user_id,
            ActivityEntryCreateRequest(activity_id=cycling.id, quantity=30, date="2024-03-01", notes="commute"),
        )
        self.assertEqual(entry.calories_burned, 240)
        with self.assertRaises(NotFoundError):
            update_activity_entry(self.conn, self.other_id, entry.id, ActivityEntryUpdateRequest(quantity=45))
        updated = update_activity_entry(self.conn, self.user_id, entry.id, ActivityEntryUpdateRequest(quantity=45))
        self.assertEqual(updated.quantity, 45)
        self.assertEqual(updated.calories_burned, 240)
        self.assertEqual(updated.notes, "commute")


    def test_entries_for_date_join_catalog_newest_time_first(self) -> None:
        by_name = {a.name: a for a in list_activities(self.conn)}
        for name, time in (("Walking", "07:00"), ("Swimming", "18:45"), ("Running", "12:00")):
            create_activity_entry(
                self.conn,
                self.user_id,
                ActivityEntryCreateRequest(activity_id=by_name[name].id, quantity=1, calories_burned=10, date="2024-03-01", time=time),
            )
        create_activity_entry(
            self.conn,
            self.user_id,
            ActivityEntryCreateRequest(activity_id=by_name["Running"].id, quantity=1, calories_burned=10, date="2024-03-02"),
        )
        entries = list_activity_entries(self.conn, self.user_id, "2024-03-01")
        self.assertEqual([e.activity_name for e in entries], ["Swimming", "Running", "Walking"])
        self.assertEqual([e.unit for e in entries], ["lap", "mile", "steps"])
        self.assertEqual(list_activity_entries(self.conn, self.other_id, "2024-03-01"), [])

    def test_delete_is_owner_scoped(self) -> None:
        running = next(a for a in list_activities(self.conn) if a.name == "Running")
        entry = create_activity_entry(
            self.conn,
            self.user_id,
            ActivityEntryCreateRequest(activity_id=running.id, quantity=3, date="2024-03-01"),
        )
        with self.assertRaises(NotFoundError):
            delete_activity_entry(self.conn, self.other_id, entry.id)
        delete_activity_entry(self.conn, self.user_id, entry.id)
        self.assertEqual(list_activity_entries(self.conn, self.user_id, "2024-03-01"), [])
        with self.assertRaises(NotFoundError):
            delete_activity_entry(self.conn, self.user_id, entry.id)


class TestUsers(_StoreTestCase):
    def test_duplicate_insert_is_a_conflict(self) -> None:
        with self.assertRaises(ConflictError):
            create_user(self.conn, username="alice", email="other@example.com", password_hash="x")
        with self.assertRaises(ConflictError):
            create_user(self.conn, username="carol", email="ALICE@example.com", password_hash="x")


class TestWeightEntries(_StoreTestCase):
    def test_same_date_overwrites(self) -> None:
        first, created = upsert_entry(self.conn, self.user_id, WeightEntryCreateRequest(weight_kg=80.0, date="2024-03-01", notes="am"))
        self.assertTrue(created)
        second, created = upsert_entry(self.conn, self.user_id, WeightEntryCreateRequest(weight_kg=79.4, date="2024-03-01"))
        self.assertFalse(created)
        self.assertEqual(first.id, second.id)
        self.assertEqual(second.weight_kg, 79.4)
        self.assertIsNone(second.notes)

        rows = self.conn.execute(
            "SELECT COUNT(*) FROM weight_entries WHERE user_id = ? AND date = ?",
            (self.user_id, "2024-03-01"),
        ).fetchone()
        self.assertEqual(rows[0], 1)

    def test_same_date_for_different_users(self) -> None:
        upsert_entry(self.conn, self.user_id, WeightEntryCreateRequest(weight_kg=80.0, date="2024-03-01"))
        _, created = upsert_entry(self.conn, self.other_id, WeightEntryCreateRequest(weight_kg=60.0, date="2024-03-01"))
        self.assertTrue(created)

    def test_listing_and_latest(self) -> None:
        for day, kg in (("2024-03-03", 79.0), ("2024-03-01", 80.0), ("2024-03-02", 79.5)):
            upsert_entry(self.conn, self.user_id, WeightEntryCreateRequest(weight_kg=kg, date=day))
        self.assertEqual([e.date for e in list_entries(self.conn, self.user_id)], ["2024-03-03", "2024-03-02", "2024-03-01"])
        self.assertEqual(
            [e.date for e in list_entries(self.conn, self.user_id, start_date="2024-03-02", end_date="2024-03-02")],
            ["2024-03-02"],
        )
        latest = latest_entry(self.conn, self.user_id)
        assert latest is not None
        self.assertEqual(latest.weight_kg, 79.0)
        self.assertIsNone(latest_entry(self.conn, self.other_id))

    def test_delete_is_owner_scoped(self) -> None:
        entry, _ = upsert_entry(self.conn, self.user_id, WeightEntryCreateRequest(weight_kg=80.0, date="2024-03-01"))
        with self.assertRaises(NotFoundError):
            delete_weight_entry(self.conn, self.other_id, entry.id)
        delete_weight_entry(self.conn, self.user_id, entry.id)
        self.assertEqual(list_entries(self.conn, self.user_id), [])


if __name__ == "__main__":
    unittest.main()
