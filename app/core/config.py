from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Booking Backend"
    API_PREFIX: str = "/api"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # Storage
    BOOKINGS_FILE: str = "data/bookings.json"
    # Refuse to start when the existing bookings file cannot be parsed
    STRICT_STORAGE: bool = False

    # Admin link printed at startup
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    ADMIN_PATH: str = "/admin"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
