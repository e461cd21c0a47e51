from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./hrdesk.db"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Salary cycle runs from this day of month M to the day before it in M+1.
    PAY_CYCLE_START_DAY: int = 6
    # Config-encoded daily goal: 8.20 means 8 hours 20 minutes.
    DEFAULT_DAILY_HOURS: float = 8.20
    BREAK_COMPLIANT_MIN_MINUTES: int = 15
    BREAK_COMPLIANT_MAX_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"

    @field_validator("PAY_CYCLE_START_DAY")
    @classmethod
    def validate_start_day(cls, value: int):
        if not 1 <= value <= 28:
            raise ValueError("PAY_CYCLE_START_DAY must be between 1 and 28")
        return value


settings = Settings()
