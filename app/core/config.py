from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.entities.calendar_config import CalendarConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Nail Studio Scheduler"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    WORK_START_HOUR: int = 9
    WORK_END_HOUR: int = 21
    BREAK_START_HOUR: int = 13
    BREAK_END_HOUR: int = 14
    SLOT_GRANULARITY_MINUTES: int = 30

    STORE_PROVIDER: str = "json"
    BOOKINGS_FILE: str = "./data/bookings.json"

    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_CHAT_ID: str | None = None
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SECONDS: float = 10.0

    NOTIFICATION_WORKERS: int = 2

    def calendar_config(self) -> CalendarConfig:
        return CalendarConfig(
            work_start=self.WORK_START_HOUR,
            work_end=self.WORK_END_HOUR,
            break_start=self.BREAK_START_HOUR,
            break_end=self.BREAK_END_HOUR,
            slot_granularity_minutes=self.SLOT_GRANULARITY_MINUTES,
        )


settings = Settings()
