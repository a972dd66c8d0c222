from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

BudgetLevel = Literal["budget", "moderate", "luxury", "ultra-luxury"]
Accommodation = Literal["hotel", "hostel", "resort", "apartment", "guesthouse", "camping"]
TravelerGroup = Literal["solo", "couple", "family", "friends"]
DietaryPlan = Literal["none", "vegetarian", "vegan", "halal", "kosher", "gluten-free"]


class TripRequest(BaseModel):
    # The web client posts camelCase keys for dates and diet.
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    destination: str = Field(min_length=1)
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    budget: BudgetLevel
    accommodation: Accommodation
    travelers: TravelerGroup
    dietary_plan: DietaryPlan = Field(alias="dietaryPlan")
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def trip_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    @property
    def date_range_label(self) -> str:
        return f"{_friendly_date(self.start_date)} - {_friendly_date(self.end_date)}"


def _friendly_date(value: date) -> str:
    return f"{value.strftime('%B')} {value.day}, {value.year}"
