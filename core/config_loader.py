import yaml
import os
import logging
from typing import List, Optional, Dict, Any, Literal
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Lets `main.py --config` reach the web app, which loads its config on import
CONFIG_PATH_ENV = "APP_CONFIG_PATH"


class StorageConfig(BaseModel):
    """Object store configuration."""
    backend: Literal["gcs", "memory"] = "gcs"
    bucket: str = "nexusblue_resumes"
    project: Optional[str] = None
    # Service account JSON is read from this env var, never from the YAML file
    credentials_env: str = "GOOGLE_SERVICE_ACCOUNT_JSON"
    cache_control: str = "no-cache"


class LlmConfig(BaseModel):
    base_url: Optional[str] = "http://localhost:11434/v1"  # Ollama OpenAI-compatible endpoint
    api_key: Optional[str] = "ollama"
    extraction_model: str = "gemma3:4b"
    extraction_temperature: float = 0.0  # Temperature for extraction (0.0 = deterministic)
    max_retries: int = Field(default=2, ge=0, le=5)  # Retries for transient failures only
    retry_backoff_seconds: float = 1.0
    retry_backoff_max_seconds: float = 30.0
    request_timeout_seconds: float = 120.0
    # Re-prompts with validation errors when the model output violates the schema.
    # 0 disables the repair loop entirely.
    repair_attempts: int = Field(default=0, ge=0, le=3)


class IngestionConfig(BaseModel):
    """Configuration for the resume ingestion pipeline."""
    accepted_content_type: str = "application/pdf"
    raw_suffix: str = ".pdf"
    parsed_prefix: str = "parsed/"
    parsed_suffix: str = ".txt"
    pending_prefix: str = "pending/"
    slug_max_length: int = 64

    # Advisory per-hash claim so concurrent uploads of the same bytes
    # only call the backend once.
    claim_ttl_seconds: int = 600
    claim_wait_seconds: float = 60.0
    claim_poll_interval_seconds: float = 2.0

    catalog_max_workers: int = 8


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = Field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])
    max_upload_bytes: int = 10 * 1024 * 1024
    upload_rate_limit: str = "10/minute"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _set_nested(data: Dict[str, Any], section: str, key: str, value: Any) -> None:
    if data.get(section) is None:
        data[section] = {}
    data[section][key] = value


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides on top of the YAML values."""
    overrides = [
        ("STORAGE_BACKEND", "storage", "backend", str),
        ("GCS_BUCKET", "storage", "bucket", str),
        ("GCS_PROJECT", "storage", "project", str),
        ("ETL_LLM_BASE_URL", "llm", "base_url", str),
        ("ETL_LLM_API_KEY", "llm", "api_key", str),
        ("ETL_LLM_MODEL", "llm", "extraction_model", str),
        ("WEB_HOST", "web", "host", str),
        ("WEB_PORT", "web", "port", int),
        ("LOG_LEVEL", "logging", "level", str),
    ]
    for env_name, section, key, cast in overrides:
        value = os.environ.get(env_name)
        if value:
            _set_nested(data, section, key, cast(value))

    env_cors = os.environ.get("CORS_ORIGINS")
    if env_cors:
        origins = [origin.strip() for origin in env_cors.split(",") if origin.strip()]
        _set_nested(data, "web", "cors_origins", origins)

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another cwd), try next to the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config.yaml found, using defaults and environment overrides")

    return AppConfig(**_apply_env_overrides(data))
