from mealcal.domain.Workout import Workout, WorkoutType
from mealcal.infra.Record_Repository import RecordRepository
from mealcal.utilities.constants import WORKOUT_KIND


class WorkoutRepository(RecordRepository):
    """Workouts ordered by type, then longest duration first (unknown duration last), then id.

    Any number of workouts may share a day.
    """
    kind = WORKOUT_KIND
    record_class = Workout
    type_enum = WorkoutType

    def sort_key(self, workout: Workout) -> tuple:
        has_duration = workout.duration is not None
        return (workout.type.order, 0 if has_duration else 1, -(workout.duration or 0.0), workout.id)
