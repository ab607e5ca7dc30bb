from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv
import secrets

load_dotenv()


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./mini_jira.db")
    RUN_MIGRATIONS: bool = os.getenv("RUN_MIGRATIONS", "False").lower() in ("true", "1", "t")

    # Application settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")
    PROJECT_NAME: str = "Mini Jira API"
    API_PREFIX: str = os.getenv("API_PREFIX", "")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")

    # CORS settings
    ALLOWED_ORIGINS: list[str] = ["*"]

    # JWT Settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = os.getenv("JWT_ISSUER", "mini-jira")
    JWT_AUDIENCE: str = os.getenv("JWT_AUDIENCE", "mini-jira-api")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
    REFRESH_TOKEN_EXPIRE_DAYS: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30"))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
