"""Configuration module for the Apple documentation server.

Provides settings for the documentation client, logging and update checks.
"""

from .settings import (
    ClientSettings,
    load_settings,
    CONFIG_FILE_ENV,
    ENV_VARS
)

__all__ = [
    'ClientSettings',
    'load_settings',
    'CONFIG_FILE_ENV',
    'ENV_VARS'
]
