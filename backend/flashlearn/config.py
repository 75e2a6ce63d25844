"""
Configuration settings for the FlashLearn learning engine.
All environment variables and app settings are centralized here.
"""
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "FlashLearn Adaptive Learning Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite default
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    # Azure Cosmos DB
    COSMOS_DB_ENDPOINT: str = "https://localhost:8081/"
    COSMOS_DB_KEY: str = ""
    COSMOS_DB_DATABASE_NAME: str = "flashlearn_db"
    # Container names
    COSMOS_DB_FLASHCARDS_CONTAINER: str = "flashcards"
    COSMOS_DB_FLASHCARD_PROGRESS_CONTAINER: str = "flashcard_progress"
    COSMOS_DB_DAILY_SESSIONS_CONTAINER: str = "daily_widget_sessions"
    COSMOS_DB_WIDGET_HISTORY_CONTAINER: str = "widget_word_history"
    COSMOS_DB_STREAKS_CONTAINER: str = "user_streaks"

    # JWT Authentication (token verification only, tokens are issued elsewhere)
    SECRET_KEY: str = "change-me"  # Gerar com: openssl rand -hex 32
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 horas

    # Quiz Settings
    DISTRACTOR_COUNT: int = 3
    DISTRACTOR_SIMILARITY_THRESHOLD: int = 3  # edit distance must be strictly below

    # Daily Widget Settings
    WIDGET_TIMEZONE: Optional[str] = None  # IANA name; None = server local time
    WIDGET_EXHAUSTED_MESSAGE: str = "You have seen all the suitable words for widgets."

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Singleton instance
settings = get_settings()
