"""Application configuration"""
import os
from typing import List, Optional
from pydantic_settings import BaseSettings


DEFAULT_TIME_SLOTS = [
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "14:00", "14:30", "15:00", "15:30", "16:00", "16:30", "17:00",
]


class Settings(BaseSettings):
    """Application settings"""
    # Database
    DB_HOST: str = os.getenv("DB_HOST", "postgres")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "agenda_db")
    DB_USER: str = os.getenv("DB_USER", "agenda_user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    # "sql" keeps everything in the database, "memory" is for demos and tests
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql")

    # Web
    HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("WEB_PORT", "8000"))
    CORS_ORIGINS: List[str] = os.getenv("WEB_CORS_ORIGINS", "http://localhost:5173").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Schedule
    BLOCK_DURATION_MINUTES: int = int(os.getenv("BLOCK_DURATION_MINUTES", "30"))
    DEFAULT_TIME_SLOTS: List[str] = DEFAULT_TIME_SLOTS
    SEED_DEFAULT_TIME_SLOTS: bool = os.getenv("SEED_DEFAULT_TIME_SLOTS", "true").lower() == "true"
    EXCLUDE_PAST_SLOTS: bool = os.getenv("EXCLUDE_PAST_SLOTS", "true").lower() == "true"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
