"""Pydantic models for the HTTP request payloads."""

from pydantic import BaseModel

from hydration_reminder.services.settings import SettingsInput


class SettingsPayload(BaseModel):
    """Reminder settings as submitted by the settings form."""

    wake_time: str
    sleep_time: str
    interval_minutes: int
    goal_liters: float
    cup_size_ml: int
    breakfast_time: str
    lunch_time: str
    dinner_time: str
    meal_buffer_minutes: int
    allow_tiny_sips: bool = False

    def to_input(self) -> SettingsInput:
        return SettingsInput(**self.model_dump())


class DrinkPayload(BaseModel):
    """Amount to add; negative values correct earlier entries."""

    ml: int
