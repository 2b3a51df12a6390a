from typing import List

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
    APP_NAME: str = "Clinic HR Attendance"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Tokens are issued by the platform auth service, only verified here
    ATLAS_APP_CODE: str = "CLINIC_HR"
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # Work dates and schedule clock times are evaluated in this zone
    HR_TIMEZONE: str = "UTC"

    # Geofence settings
    GEOFENCE_DEFAULT_RADIUS_M: int = 100

    # Defaults for a schedule created without explicit values
    DEFAULT_WORK_DAYS: List[int] = [1, 2, 3, 4, 5]
    DEFAULT_START_TIME: str = "09:00"
    DEFAULT_END_TIME: str = "17:00"
    DEFAULT_GRACE_MINUTES: int = 10

    # WebAuthn relying party
    WEBAUTHN_RP_ID: str = "localhost"
    WEBAUTHN_RP_NAME: str = "MED LOOP HR"
    WEBAUTHN_ORIGIN: str = "http://localhost:3000"
    WEBAUTHN_CHALLENGE_TTL_SECONDS: int = 300

    BCRYPT_ROUNDS: int = 10


settings = Settings()
