import unittest
from datetime import date, datetime
from mealcal.domain.Meal import Meal, MealType
from mealcal.domain.Workout import Workout, WorkoutType
from mealcal.infra.Meal_Repository import MealRepository
from mealcal.infra.Record_Store import InMemoryRecordStore
from mealcal.infra.Workout_Repository import WorkoutRepository
from mealcal.infra.pdf_utils import generate_pdf_for_week
from mealcal.logic.reporting.summary import compute_week_summary


class TestWeekSummary(unittest.TestCase):

    def setUp(self):
        store = InMemoryRecordStore()
        self.meals = MealRepository(store)
        self.workouts = WorkoutRepository(store)
        self.meals.save(Meal("Soup", MealType.dinner, datetime(2024, 6, 3, 21)))
        self.meals.save(Meal("Toast", MealType.breakfast, datetime(2024, 6, 3, 8), notes="butter"))
        self.workouts.save(Workout(WorkoutType.running, datetime(2024, 6, 4, 7), distance=5.0, duration=30))
        self.workouts.save(Workout(WorkoutType.cycling, datetime(2024, 6, 9, 10), distance=20.25, duration=60))
        self.workouts.save(Workout(WorkoutType.yoga, datetime(2024, 6, 10, 10), duration=45))  # next week

    def test_days_and_totals(self):
        summary = compute_week_summary(date(2024, 6, 3), self.meals, self.workouts)
        self.assertEqual(summary["start"], "2024-06-03")
        self.assertEqual(summary["end"], "2024-06-09")
        self.assertEqual(len(summary["days"]), 7)
        monday = summary["days"][0]
        self.assertEqual([m["name"] for m in monday["meals"]], ["Toast", "Soup"])
        self.assertEqual(monday["workouts"], [])
        tuesday = summary["days"][1]
        self.assertEqual(tuesday["workouts"][0]["distance_text"], "5.00 km")
        self.assertEqual(tuesday["workouts"][0]["duration_text"], "30 min")
        self.assertEqual(summary["week_totals"], {
            "meals": 2, "workouts": 2, "distance_km": 25.25, "duration_min": 90.0,
        })

    def test_pdf_export(self):
        summary = compute_week_summary(date(2024, 6, 3), self.meals, self.workouts)
        pdf = generate_pdf_for_week(summary)
        self.assertTrue(pdf.startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
