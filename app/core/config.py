from datetime import time

from atams import AtamsBaseSettings


class Settings(AtamsBaseSettings):
    """
    Application Settings

    Inherits from AtamsBaseSettings which includes:
    - DATABASE_URL (required)
    - ATLAS_SSO_URL, ATLAS_APP_CODE, ATLAS_ENCRYPTION_KEY, ATLAS_ENCRYPTION_IV
    - ENCRYPTION_ENABLED, ENCRYPTION_KEY, ENCRYPTION_IV (response encryption)
    - LOGGING_ENABLED, LOG_LEVEL, LOG_TO_FILE, LOG_FILE_PATH
    - CORS_ORIGINS, CORS_ALLOW_CREDENTIALS, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
    - RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW
    - DEBUG

    All settings can be overridden via .env file or by redefining them here.
    """
    APP_NAME: str = "HRIS Presence"
    APP_VERSION: str = "1.0.0"

    # Local wall clock used for "today", lateness and cutoffs
    TIMEZONE: str = "Asia/Jakarta"

    # Check-in classification
    WORK_LATE_THRESHOLD: str = "10:00"
    LATE_NOTE_MARKER: str = "Terlambat"

    # Auto-checkout settings
    AUTO_CHECKOUT_TIME: str = "16:00"
    AUTO_CHECKOUT_REASON: str = "Auto check-out"
    AUTO_CHECKOUT_CRON: str = "0 16 * * *"

    # WFH expiry sweep
    EXPIRY_SWEEP_CRON: str = "5 0 * * *"
    EXPIRE_WFH_ON_CHECK_IN: bool = True

    # Periodic triggers
    SCHEDULER_ENABLED: bool = False
    CRON_API_KEY: str = ""
    BATCH_MAX_RETRIES: int = 3
    BATCH_RETRY_DELAY_SECONDS: float = 0.5

    # Geofence settings
    GEOFENCE_ENFORCED: bool = True
    DEFAULT_GEOFENCE_RADIUS_M: int = 100
    DEFAULT_OFFICE_ID: str = "HQ"
    OFFICE_CACHE_TTL_SECONDS: int = 60

    # Holiday calendar
    HOLIDAYS_FILE: str = "holidays.json"

    @property
    def late_threshold(self) -> time:
        return parse_clock(self.WORK_LATE_THRESHOLD)

    @property
    def auto_checkout_time(self) -> time:
        return parse_clock(self.AUTO_CHECKOUT_TIME)


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string"""
    hours, _, minutes = value.strip().partition(":")
    return time(int(hours), int(minutes or 0))


settings = Settings()
