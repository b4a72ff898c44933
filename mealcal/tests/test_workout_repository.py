import unittest
from datetime import date, datetime
from mealcal.domain.Workout import Workout, WorkoutType
from mealcal.infra.Record_Store import InMemoryRecordStore
from mealcal.infra.Workout_Repository import WorkoutRepository


class TestWorkout(unittest.TestCase):

    def test_negative_values_rejected(self):
        with self.assertRaises(ValueError):
            Workout(WorkoutType.running, datetime(2024, 1, 1), distance=-1)
        with self.assertRaises(ValueError):
            Workout(WorkoutType.running, datetime(2024, 1, 1), duration=-5)

    def test_distance_and_duration_optional(self):
        w = Workout(WorkoutType.yoga, datetime(2024, 1, 1))
        self.assertIsNone(w.distance)
        self.assertIsNone(w.duration)
        self.assertEqual(w.summary_text(), "Yoga")

    def test_summary_text(self):
        w = Workout(WorkoutType.running, datetime(2024, 1, 1), distance=5.456, duration=31.6)
        self.assertEqual(w.summary_text(), "Running · 5.46 km · 32 min")

    def test_copy_with_keeps_id(self):
        w = Workout(WorkoutType.gym, datetime(2024, 1, 1), duration=45)
        edited = w.copy_with(duration=60, notes="legs")
        self.assertEqual(edited.id, w.id)
        self.assertEqual(edited.duration, 60.0)


class TestWorkoutRepository(unittest.TestCase):

    def setUp(self):
        self.repo = WorkoutRepository(InMemoryRecordStore())
        self.day = date(2024, 6, 4)

    def test_many_workouts_per_day(self):
        for t in (WorkoutType.running, WorkoutType.yoga, WorkoutType.gym):
            self.repo.save(Workout(t, datetime(2024, 6, 4, 7), duration=30))
        self.assertEqual(len(self.repo.records_for_day(self.day)), 3)

    def test_type_order_then_duration_descending(self):
        short_run = Workout(WorkoutType.running, datetime(2024, 6, 4, 7), distance=3, duration=20)
        long_run = Workout(WorkoutType.running, datetime(2024, 6, 4, 18), distance=10, duration=55)
        swim = Workout(WorkoutType.swimming, datetime(2024, 6, 4, 12), duration=90)
        walk = Workout(WorkoutType.walking, datetime(2024, 6, 4, 9), distance=2)
        for w in (swim, short_run, walk, long_run):
            self.repo.save(w)
        self.assertEqual(self.repo.records_for_day(self.day), [long_run, short_run, walk, swim])

    def test_unknown_duration_sorts_last_within_type(self):
        timed = Workout(WorkoutType.cycling, datetime(2024, 6, 4, 7), duration=10)
        untimed = Workout(WorkoutType.cycling, datetime(2024, 6, 4, 8), distance=25)
        self.repo.save(untimed)
        self.repo.save(timed)
        self.assertEqual(self.repo.records_for_day(self.day), [timed, untimed])

    def test_filtered_by_type(self):
        run = Workout(WorkoutType.running, datetime(2024, 6, 4, 7), duration=20)
        self.repo.save(run)
        self.repo.save(Workout(WorkoutType.gym, datetime(2024, 6, 4, 19), duration=60))
        self.assertEqual(self.repo.records_for_day(self.day, WorkoutType.running), [run])
        self.assertEqual(self.repo.records_for_day(self.day, WorkoutType.swimming), [])

    def test_upsert(self):
        w = Workout(WorkoutType.running, datetime(2024, 6, 4, 7), distance=5, duration=30)
        self.repo.save(w)
        self.repo.save(w.copy_with(distance=6.5))
        found = self.repo.records_for_day(self.day)
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].distance, 6.5)


if __name__ == '__main__':
    unittest.main()
