"""Week summary aggregation: each day's meals and workouts plus week totals."""
from collections import defaultdict
from datetime import date
from typing import Dict, Any

from mealcal.logic.calendar.week import week_days


def _meal_line(meal) -> Dict[str, Any]:
    return {
        'id': meal.id,
        'type': meal.type.value,
        'label': meal.type.label,
        'icon': meal.type.icon,
        'name': meal.name,
        'notes': meal.notes,
    }


def _workout_line(workout) -> Dict[str, Any]:
    return {
        'id': workout.id,
        'type': workout.type.value,
        'label': workout.type.label,
        'icon': workout.type.icon,
        'distance': workout.distance,
        'duration': workout.duration,
        'distance_text': f"{workout.distance:.2f} km" if workout.distance is not None else None,
        'duration_text': f"{workout.duration:.0f} min" if workout.duration is not None else None,
        'notes': workout.notes,
    }


def compute_week_summary(start: date, meal_repository, workout_repository) -> Dict[str, Any]:
    """Aggregate the week starting at ``start``.

    Returns structure:
    {
      'start': 'YYYY-MM-DD', 'end': 'YYYY-MM-DD',
      'days': [
         {'date': 'YYYY-MM-DD', 'weekday': 'Mon', 'meals': [...], 'workouts': [...],
          'distance_km': float, 'duration_min': float},
         ...
      ],
      'week_totals': {'meals': int, 'workouts': int, 'distance_km': float, 'duration_min': float}
    }
    """
    totals = defaultdict(float)
    days = []
    for day in week_days(start):
        meals = meal_repository.records_for_day(day)
        workouts = workout_repository.records_for_day(day)
        distance = sum(w.distance or 0.0 for w in workouts)
        duration = sum(w.duration or 0.0 for w in workouts)
        days.append({
            'date': day.isoformat(),
            'weekday': day.strftime('%a'),
            'meals': [_meal_line(m) for m in meals],
            'workouts': [_workout_line(w) for w in workouts],
            'distance_km': round(distance, 2),
            'duration_min': round(duration, 1),
        })
        totals['meals'] += len(meals)
        totals['workouts'] += len(workouts)
        totals['distance_km'] += distance
        totals['duration_min'] += duration

    return {
        'start': days[0]['date'],
        'end': days[-1]['date'],
        'days': days,
        'week_totals': {
            'meals': int(totals['meals']),
            'workouts': int(totals['workouts']),
            'distance_km': round(totals['distance_km'], 2),
            'duration_min': round(totals['duration_min'], 1),
        }
    }

__all__ = ["compute_week_summary"]
