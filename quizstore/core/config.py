from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "Quiz Store API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Database
    DATABASE_URL: str = "sqlite:///./quizstore.db"
    SQL_ECHO: bool = False

    # Seed (clé admin + licences de démo)
    SEED_DEFAULTS: bool = True
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_MAX_DEVICES: int = 3

    # Licence
    LICENSE_HEADER: str = "x-license-key"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
