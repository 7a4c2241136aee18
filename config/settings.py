"""Runtime settings for the Apple documentation client and server.

Settings come from field defaults, an optional YAML file and environment
variables, in that order of precedence (environment wins).
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Environment variable -> settings field
ENV_VARS = {
    'APPLE_DOCS_BASE_URL': 'base_url',
    'APPLE_DOCS_REQUEST_TIMEOUT': 'request_timeout',
    'APPLE_DOCS_CACHE_TTL': 'cache_ttl_seconds',
    'APPLE_DOCS_USER_AGENT': 'user_agent',
    'APPLE_DOCS_GLOBAL_SEARCH_LIMIT': 'global_search_framework_limit',
    'APPLE_DOCS_MAX_RESULTS': 'default_max_results',
    'APPLE_DOCS_LOG_LEVEL': 'log_level',
    'APPLE_DOCS_LOG_JSON': 'log_json',
    'APPLE_DOCS_LOG_FILE': 'log_file',
    'APPLE_DOCS_CHECK_UPDATES': 'check_updates_on_startup',
    'APPLE_DOCS_REPO_PATH': 'repository_path',
    'APPLE_DOCS_GIT_TIMEOUT': 'git_timeout',
}

CONFIG_FILE_ENV = 'APPLE_DOCS_CONFIG'


class ClientSettings(BaseModel):
    """Configuration for the documentation client, logging and updates."""
    base_url: str = Field(default="https://developer.apple.com/tutorials/data",
                          description="Root of the documentation JSON API")
    request_timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")
    cache_ttl_seconds: float = Field(default=600.0, gt=0, description="Response cache time-to-live")
    user_agent: str = Field(default="apple-docs-mcp/1.0", description="User-Agent header")
    global_search_framework_limit: int = Field(
        default=5, ge=1,
        description="Frameworks scanned by a global search; trades completeness for latency")
    default_max_results: int = Field(default=20, ge=1, description="Search result cap when none is given")

    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON log lines on stderr")
    log_file: Optional[str] = Field(default=None, description="Optional JSON log file")

    check_updates_on_startup: bool = Field(default=True, description="Run a quiet git check at startup")
    repository_path: str = Field(default=str(PROJECT_ROOT), description="Checkout inspected by check_updates")
    git_timeout: float = Field(default=10.0, gt=0, description="Timeout for each git command")

    @classmethod
    def _known(cls, data: Dict[str, Any], source: str) -> Dict[str, Any]:
        known = {}
        for key, value in data.items():
            if key in cls.model_fields:
                known[key] = value
            else:
                logger.warning(f"Ignoring unknown setting '{key}' in {source}")
        return known

    @classmethod
    def env_overrides(cls) -> Dict[str, Any]:
        return {
            field_name: os.environ[env_name]
            for env_name, field_name in ENV_VARS.items()
            if os.environ.get(env_name) not in (None, '')
        }

    @classmethod
    def from_env(cls) -> 'ClientSettings':
        """Create settings from environment variables."""
        return cls(**cls.env_overrides())

    @classmethod
    def from_yaml(cls, path) -> 'ClientSettings':
        """Create settings from a YAML mapping of field names to values."""
        yaml_file = Path(path)
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {yaml_file} must contain a mapping")
        return cls(**cls._known(data, str(yaml_file)))


def load_settings() -> ClientSettings:
    """Load settings from ``$APPLE_DOCS_CONFIG`` (if set) and the environment."""
    data: Dict[str, Any] = {}
    config_file = os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        data.update(ClientSettings.from_yaml(config_file).model_dump(exclude_unset=True))
        logger.info(f"Loaded settings from {config_file}")
    data.update(ClientSettings.env_overrides())
    return ClientSettings(**data)
