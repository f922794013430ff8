"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./eventhub.db"
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    BROADCAST_SEND_TIMEOUT: float = 5.0

    class Config:
        env_file = ".env"


settings = Settings()
