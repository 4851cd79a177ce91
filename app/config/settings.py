from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./care_tracker.db"
    database_echo: bool = False
    auto_create_tables: bool = True  # Create missing tables on startup

    # Supabase (identity provider only)
    supabase_url: str = ""
    supabase_key: str = ""

    # Day templates & calendar
    default_template_color: str = "#4A90A4"
    custom_section_title: str = "My Tasks"
    max_range_days: int = 366

    # App
    app_name: str = "care-tracker-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:8081,http://localhost:19006,http://127.0.0.1:8081"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    rate_limit_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
