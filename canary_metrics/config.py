from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .backends.flightsql import DEFAULT_METRIC_ID_TEMPLATE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CANARY_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hyprstream
    flight_sql_uri: str = "grpc://localhost:50051"
    metric_id_template: str = DEFAULT_METRIC_ID_TEMPLATE

    # Stackdriver
    stackdriver_project: Optional[str] = None

    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
