from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Directory holding the termux-* executables; empty means look them up on PATH.
    termux_bin_dir: str = ""

    # Seconds before a child process is abandoned. None blocks until it exits.
    command_timeout: float | None = None

    @field_validator("command_timeout", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, value):
        if value in ("", "0", 0, None):
            return None
        return value

    dialog_select_title: str = "  SELECT"
    dialog_name_title: str = "  NAME"
    dialog_text_title: str = "  TEXT"

    location_provider: str = "network"  # "gps", "network" or "passive"

    photo_dir: str = "/storage/emulated/0/DCIM/termux"

    whatsapp_rewrite_trunk_prefix: bool = True

    api_token: str = ""

    # Plans waiting for POST /command/confirm.
    pending_plan_ttl_seconds: int = 600
    max_pending_plans: int = 50

    log_level: str = "info"

    sentry_dsn: str = ""

    environment: str = "development"


settings = Settings()
