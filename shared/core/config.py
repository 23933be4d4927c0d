import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8003")

    # Relational store (service credentials, trusted system-to-system path)
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    DB_NAME: str | None = os.getenv("DB_NAME")

    # Twilio
    TWILIO_AUTH_TOKEN: str | None = os.getenv("TWILIO_AUTH_TOKEN")
    TWILIO_VALIDATE_SIGNATURE: bool = os.getenv(
        "TWILIO_VALIDATE_SIGNATURE", "False").lower() == "true"

    # Gemini title summarizer, optional
    GEMINI_API_KEY: str | None = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    SUMMARY_TIMEOUT_SECONDS: float = float(
        os.getenv("SUMMARY_TIMEOUT_SECONDS", 5))
    SUMMARY_MIN_LENGTH: int = int(os.getenv("SUMMARY_MIN_LENGTH", 5))
    TITLE_FALLBACK_LENGTH: int = int(os.getenv("TITLE_FALLBACK_LENGTH", 40))

    # Routing of messages from unknown senders
    DEFAULT_ORG_ID: str | None = os.getenv("DEFAULT_ORG_ID")
    FALLBACK_TO_LATEST_ORG: bool = os.getenv(
        "FALLBACK_TO_LATEST_ORG", "True").lower() == "true"
    SITE_CODE_PATTERN: str = os.getenv(
        "SITE_CODE_PATTERN", r"\b[A-Za-z]+-\d+\b")

    TICKET_ID_ATTEMPTS: int = int(os.getenv("TICKET_ID_ATTEMPTS", 5))
    # Echo raw store errors back to the sender (early rollout only)
    ECHO_STORE_ERRORS: bool = os.getenv(
        "ECHO_STORE_ERRORS", "False").lower() == "true"

    ADMIN_API_TOKEN: str | None = os.getenv("ADMIN_API_TOKEN")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def build_database_url(s: Settings) -> str:
    if s.DATABASE_URL:
        return s.DATABASE_URL
    if s.DB_HOST:
        return (
            f"postgresql+psycopg2://{s.DB_USER}:{s.DB_PASS}@{s.DB_HOST}:{s.DB_PORT}/{s.DB_NAME}?sslmode=require"
        )
    return "sqlite:///./intake.db"


INTAKE_DATABASE_URL = build_database_url(settings)
