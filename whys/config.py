"""Service configuration — listen address, logging and telemetry knobs."""

from pydantic_settings import BaseSettings

from whys.analysis.models import ExportFormat


class Settings(BaseSettings):
    model_config = {"env_prefix": "WHYS_"}

    # Service
    service_name: str = "five-whys"
    service_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8100

    # Logging
    log_level: str = "INFO"

    # Export
    default_export_format: ExportFormat = ExportFormat.MARKDOWN

    # Telemetry (empty endpoint disables OTLP export)
    otlp_endpoint: str = ""


settings = Settings()
