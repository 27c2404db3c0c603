# storefront/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from pathlib import Path
from functools import lru_cache

class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where the storage CSV / XLSX file lives
    STORAGE_BACKEND: str = "file"  # "file" or "memory"
    STORAGE_FILE: str = "storage.csv"  # can be storage.xlsx if you prefer Excel

    PLACEHOLDER_IMAGE: str = "/placeholder-image.jpg"

    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"

    LOG_LEVEL: str = "INFO"

    # Example .env:
    # DATA_DIR=./data
    # STORAGE_FILE=storage.xlsx

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()

settings = Settings()
