"""Bootstrap configuration — loaded from .env file / environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class StackSettings(BaseSettings):
    """Ports and credentials of the compose stack, plus CLI knobs."""

    # Empty values (ES_PORT=) fall back to the defaults below
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_ignore_empty": True,
        "extra": "ignore",
    }

    # Published ports (same names as the compose .env)
    es_port: int = 9200
    kibana_port: int = 5601
    fleet_port: int = 8220

    # Superuser for Kibana APIs
    elastic_username: str = "elastic"
    elastic_password: str = "changeme"

    # Where the stack is reachable from this machine
    stack_host: str = "localhost"

    # Per-request HTTP timeout for a single probe attempt
    probe_timeout_seconds: float = 10.0

    # Docker CLI (assumes `docker` is on PATH)
    docker_cli_path: str = "docker"

    # Logging
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # .env overrides the process environment, as `export $(… .env)` did
        return init_settings, dotenv_settings, env_settings, file_secret_settings


settings = StackSettings()
