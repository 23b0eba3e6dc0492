from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Heirloom"
    database_url: str = "sqlite:///./heirloom.db"
    upload_dir: str = "data/uploads"
    default_max_generations: int = 4
    placeholder_portrait_base: str = "/static/portraits"
    log_level: str = "INFO"
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
