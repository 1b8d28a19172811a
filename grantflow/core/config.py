from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "grantflow"
    debug: bool = False

    # Workflow configuration (YAML); built-in defaults when unset
    workflow_config_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/grantflow"
    file_logging: bool = False

    model_config = SettingsConfigDict(
        env_prefix="GRANTFLOW_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
