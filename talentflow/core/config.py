"""
TalentFlow: Configuration Management

This module provides centralised configuration management for TalentFlow.
It loads configuration from environment variables (optionally via a .env
file), with strongly typed access via Pydantic BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration objects for the database, logging and the
  assessment engine
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Database tables accessed:
- None (configuration only)

Thread safety: Thread-safe (configuration is immutable after initial load)

Author: TalentFlow Team
Created: 2026-10-12
Last Modified: 2026-10-16
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

if TYPE_CHECKING:  # pragma: no cover - import only for annotations
    from talentflow.assessment.config import AssessmentConfig

# ============================================================================
# Data Models
# ============================================================================


class DatabaseConfig(BaseModel):
    """Database connection configuration.

    Describes the single PostgreSQL database that backs the assessment
    and response stores.

    Attributes:
        host: Database host name or IP address.
        port: TCP port for the PostgreSQL instance.
        name: Database name.
        user: Database user for connections.
        password: Password for the database user.
        pool_size: Maximum number of connections in the pool.
        pool_timeout: Timeout (in seconds) when acquiring a connection.
    """

    host: str
    port: int
    name: str
    user: str
    password: str
    pool_size: int = 5
    pool_timeout: int = 30


class LoggingConfig(BaseModel):
    """Logging configuration for TalentFlow.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the primary log file.
    """

    level: str = "INFO"
    file: str = "talentflow.log"


class TalentFlowConfig(BaseSettings):
    """Main TalentFlow configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - RUNTIME_DB_* for the runtime database
    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    - ASSESSMENT_* for assessment engine behaviour
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Runtime DB
    runtime_db_host: str = Field(default="localhost", alias="RUNTIME_DB_HOST")
    runtime_db_port: int = Field(default=5432, alias="RUNTIME_DB_PORT")
    runtime_db_name: str = Field(default="talentflow", alias="RUNTIME_DB_NAME")
    runtime_db_user: str = Field(default="talentflow", alias="RUNTIME_DB_USER")
    runtime_db_password: str = Field(default="", alias="RUNTIME_DB_PASSWORD")
    runtime_db_pool_size: int = Field(default=5, alias="RUNTIME_DB_POOL_SIZE")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="talentflow.log", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Assessment engine
    assessment_strict_options: bool = Field(
        default=True, alias="ASSESSMENT_STRICT_OPTIONS"
    )
    assessment_reject_invalid_references: bool = Field(
        default=False, alias="ASSESSMENT_REJECT_INVALID_REFERENCES"
    )

    @property
    def runtime_db(self) -> DatabaseConfig:
        """Return database configuration for the runtime DB."""

        return DatabaseConfig(
            host=self.runtime_db_host,
            port=self.runtime_db_port,
            name=self.runtime_db_name,
            user=self.runtime_db_user,
            password=self.runtime_db_password,
            pool_size=self.runtime_db_pool_size,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)

    @property
    def assessment(self) -> "AssessmentConfig":
        """Return assessment engine configuration.

        Environment variables:
        - ASSESSMENT_STRICT_OPTIONS
        - ASSESSMENT_REJECT_INVALID_REFERENCES

        Builder defaults are not environment-driven and keep the values
        declared on :class:`AssessmentConfig`.
        """

        from talentflow.assessment.config import AssessmentConfig

        return AssessmentConfig(
            strict_option_membership=self.assessment_strict_options,
            reject_invalid_references=self.assessment_reject_invalid_references,
        )


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> TalentFlowConfig:
    """Load TalentFlow configuration.

    For local development this function will attempt to load a `.env` file
    from the project root if one is present. Environment variables always
    take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`TalentFlowConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file overrides existing values so tests and
        # local runs control configuration.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return TalentFlowConfig()  # type: ignore[call-arg]


_global_config: Optional[TalentFlowConfig] = None


def get_config() -> TalentFlowConfig:
    """Return the global TalentFlow configuration singleton.

    The configuration is loaded on first access (lazy loading) and cached
    for subsequent calls. This should be the primary entrypoint for most
    modules that need configuration values.

    Returns:
        A cached :class:`TalentFlowConfig` instance.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config
