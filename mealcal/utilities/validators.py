"""
Input validation schemas using Pydantic for API bodies and legacy records.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union
from datetime import datetime, date


class MealInput(BaseModel):
    """Schema for creating or editing a meal."""
    id: Optional[str] = Field(None, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field("meal", min_length=1)
    date: datetime
    notes: str = Field("", max_length=2000)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Meal names cannot be blank."""
        if not v.strip():
            raise ValueError('Meal name cannot be empty')
        return v.strip()


class WorkoutInput(BaseModel):
    """Schema for creating or editing a workout."""
    id: Optional[str] = Field(None, min_length=1)
    type: str = Field("other", min_length=1)
    date: datetime
    distance: Optional[float] = Field(None, ge=0, description="km")
    duration: Optional[float] = Field(None, ge=0, description="minutes")
    notes: str = Field("", max_length=2000)


class EditorOpenInput(BaseModel):
    """Schema for an open-editor intent; record_id None means a new record."""
    date: date
    type: Optional[str] = None
    record_id: Optional[str] = None


class FrequentMealInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class LegacyMealRecord(BaseModel):
    """One meal as older app versions serialized it."""
    id: str = Field(..., min_length=1)
    name: str
    type: str
    date: Union[float, str]
    notes: str = ""


class LegacyWorkoutRecord(BaseModel):
    """One workout as older app versions serialized it."""
    id: str = Field(..., min_length=1)
    type: str
    date: Union[float, str]
    distance: Optional[float] = None
    duration: Optional[float] = None
    notes: str = ""
