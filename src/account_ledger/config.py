from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Reject non-positive deposit/withdraw amounts instead of ignoring them
    strict_amounts: bool = False

    first_account_id: int = 1

    metrics_enabled: bool = True


settings = Settings()
