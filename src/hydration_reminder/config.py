"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hydration_reminder.services.settings import SettingsInput

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    wake_time: str = "07:30"
    sleep_time: str = "22:30"
    interval_minutes: int = 60
    goal_liters: float = 2.2
    cup_size_ml: int = 250
    breakfast_time: str = "07:00"
    lunch_time: str = "12:00"
    dinner_time: str = "19:00"
    meal_buffer_minutes: int = 30
    allow_tiny_sips: bool = False
    notify_url: str | None = None
    notify_timeout_seconds: float = 10
    environment: str = Field(default=_ENVIRONMENT, validation_alias="ENVIRONMENT")

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        env_prefix="HYDRATION_",
        extra="ignore",
    )

    def reminder_input(self) -> SettingsInput:
        """Return the session defaults as raw settings input."""
        return SettingsInput(
            wake_time=self.wake_time,
            sleep_time=self.sleep_time,
            interval_minutes=self.interval_minutes,
            goal_liters=self.goal_liters,
            cup_size_ml=self.cup_size_ml,
            breakfast_time=self.breakfast_time,
            lunch_time=self.lunch_time,
            dinner_time=self.dinner_time,
            meal_buffer_minutes=self.meal_buffer_minutes,
            allow_tiny_sips=self.allow_tiny_sips,
        )
