from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Day Messages"
    API_V1_STR: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 999

    # Environment ("development" or "production")
    ENVIRONMENT: str = "development"
    LOG_JSON: bool = False  # Force JSON logs outside production

    # CORS - the public API is open to any origin by default
    CORS_ORIGINS: list[str] = ["*"]
    SECURE_HEADERS_ENABLED: bool = True

    # Messages
    MESSAGE_MAX_LENGTH: int = 280

    # Blog views
    VIEW_DEDUP_WINDOW_HOURS: float = 24.0
    VISITOR_ID_MAX_LENGTH: int = 128

    # Sentry (optional, disabled when empty)
    SENTRY_DSN: str = ""

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
