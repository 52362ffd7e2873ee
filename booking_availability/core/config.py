import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Загрузка переменных из .env
load_dotenv()


class Settings(BaseModel):
    project_name: str = "Booking Availability Service"
    database_url: str = "sqlite+aiosqlite:///./bookings.db"
    database_echo: bool = False

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_create: str = "30/minute"  # Per client IP, POST /bookings
    rate_limit_extend: str = "60/minute"  # Per client IP, POST /bookings/{id}/extend


settings = Settings(
    project_name=os.environ.get("PROJECT_NAME", "Booking Availability Service"),
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./bookings.db"),
    database_echo=os.environ.get("DATABASE_ECHO", "false").lower() == "true",
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_create=os.environ.get("RATE_LIMIT_CREATE", "30/minute"),
    rate_limit_extend=os.environ.get("RATE_LIMIT_EXTEND", "60/minute"),
)
