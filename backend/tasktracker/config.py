from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./task_tracker.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT / session cookie
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    AUTH_COOKIE_NAME: str = "AUTH_TOKEN"
    COOKIE_SECURE: bool = True

    BCRYPT_ROUNDS: int = 10

    # Outbound mail (welcome email)
    MAIL_ENABLED: bool = False
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    MAIL_FROM: str = ""
    MAIL_TIMEOUT_SECONDS: float = 10.0
    APP_BASE_URL: str = "http://localhost:3000/"

    # AI summary (OpenAI compatible endpoint)
    AI_FEATURES_ENABLED: bool = True
    OPENAI_API_KEY: str = "your_openai_api_key"
    AI_BASE_URL: str = "https://api.openai.com/v1"
    AI_SUMMARY_MODEL: str = "gpt-4o-mini"
    AI_TIMEOUT_SECONDS: float = 20.0

    @property
    def token_max_age_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    class Config:
        # backend/.env regardless of the working directory
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
