from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SOD_", env_file=".env", extra="ignore")

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console output

    # Error rendering
    ERROR_SEPARATOR: str = "; "   # Joins issues in Failure.error and ValidationError
    UNION_SEPARATOR: str = " OR "  # Joins candidate errors when every union branch fails

    @property
    def is_verbose(self) -> bool:
        return self.LOG_LEVEL.upper() == "DEBUG"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
