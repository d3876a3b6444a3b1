"""
Configuration for ingestion runs.

Settings come from, in increasing priority: built-in defaults, an optional
YAML file, environment variables (a .env file is loaded first), and finally
explicit overrides such as CLI flags.

Example YAML:
```yaml
archive_path: data/modified_sms_v2.xml
batch_size: 50
currency: RWF
database:
  host: localhost
  port: 5432
  name: momo
  user: momo
```
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_VARS = {
    "archive_path": "MOMO_ARCHIVE_PATH",
    "unprocessed_log_path": "MOMO_UNPROCESSED_LOG",
    "report_path": "MOMO_REPORT_PATH",
    "batch_size": "MOMO_BATCH_SIZE",
    "currency": "MOMO_CURRENCY",
    "account_label": "MOMO_ACCOUNT_LABEL",
    "log_level": "LOG_LEVEL",
    "log_format": "LOG_FORMAT",
}

DATABASE_ENV_VARS = {
    "host": "DB_HOST",
    "port": "DB_PORT",
    "name": "DB_NAME",
    "user": "DB_USER",
    "password": "DB_PASSWORD",
}


class DatabaseSettings(BaseModel):
    host: str = "localhost"
    port: int = Field(5432, ge=1, le=65535)
    name: str = "momo"
    user: str = "momo"
    password: str | None = None


class IngestionSettings(BaseModel):
    """
    Settings for one ingestion run.

    Attributes:
        archive_path: SMS archive to ingest
        archive_format: "xml" or "json"; inferred from the suffix when None
        unprocessed_log_path: JSON-lines log of messages that were not ingested
        report_path: Run report written at the end of each run
        batch_size: Messages per batch (also the concurrency limit)
        currency: Currency code stamped on records and used as amount marker
        account_label: Wallet name in third-party notices ("on your MOMO account")
        log_level: Console log level
        log_format: "json" or "text"
        database: PostgreSQL connection settings
    """

    archive_path: str = "data/modified_sms_v2.xml"
    archive_format: str | None = None
    unprocessed_log_path: str = "logs/unprocessed.log"
    report_path: str = "logs/processing-stats.json"
    batch_size: int = Field(50, ge=1)
    currency: str = Field("RWF", min_length=1)
    account_label: str = Field("MOMO", min_length=1)
    log_level: str = "INFO"
    log_format: str = "json"
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        env_file: str | Path | None = None,
        **overrides: Any,
    ) -> "IngestionSettings":
        """
        Load settings from YAML, environment and overrides.

        Args:
            config_path: Optional YAML file
            env_file: Optional .env file (defaults to ./.env if present)
            **overrides: Values that win over every other source; None is ignored.
                         Database fields use a "db_" prefix (db_host, db_port, ...)

        Returns:
            Validated IngestionSettings

        Raises:
            FileNotFoundError: If config_path does not exist
            ValueError: If the YAML file is not a mapping
        """
        load_dotenv(env_file)

        values: dict[str, Any] = {}
        if config_path is not None:
            values.update(_load_yaml(config_path))

        database: dict[str, Any] = dict(values.pop("database", None) or {})

        for field_name, env_var in ENV_VARS.items():
            if os.getenv(env_var):
                values[field_name] = os.getenv(env_var)
        for field_name, env_var in DATABASE_ENV_VARS.items():
            if os.getenv(env_var):
                database[field_name] = os.getenv(env_var)

        for key, value in overrides.items():
            if value is None:
                continue
            if key.startswith("db_"):
                database[key[3:]] = value
            else:
                values[key] = value

        values["database"] = database
        return cls(**values)


def _load_yaml(config_path: str | Path) -> dict[str, Any]:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Configuration file must contain a mapping")

    return config
