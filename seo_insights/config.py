"""
Configuration module for loading environment variables and settings.

This module handles:
1. Loading variables from a .env file
2. Setting default configurations
3. Validating numeric settings (the API key itself is optional here; it may
   also come from the persisted credential store)
"""

import os
from dotenv import load_dotenv

from seo_insights.infrastructure.gemini.client import DEFAULT_BASE_URL, DEFAULT_MODEL
from seo_insights.infrastructure.tools.catalog import CORE_TOOL_ID

# Load environment variables from .env file
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config:
    """Configuration manager for the Gemini endpoint, retries and storage."""

    # Gemini (GEMINI_API_KEY is read by settings.CredentialsRepository)
    GEMINI_MODEL: str = os.getenv('GEMINI_MODEL', DEFAULT_MODEL)
    GEMINI_BASE_URL: str = os.getenv('GEMINI_BASE_URL', DEFAULT_BASE_URL)

    # Retry policy
    MAX_ATTEMPTS: int = _env_int('SEO_MAX_ATTEMPTS', 3)
    BASE_DELAY_MS: int = _env_int('SEO_BASE_DELAY_MS', 1000)
    REQUEST_TIMEOUT: float = _env_float('SEO_REQUEST_TIMEOUT', 60.0)

    # Session / storage
    DEFAULT_TOOL: str = os.getenv('SEO_DEFAULT_TOOL', CORE_TOOL_ID)
    DATA_DIR: str = os.getenv('SEO_DATA_DIR', '.')
    LOG_LEVEL: str = os.getenv('SEO_LOG_LEVEL', 'WARNING').upper()

    @classmethod
    def validate(cls) -> None:
        """
        Validate numeric settings.

        Raises:
            ValueError: If a setting is out of range
        """
        if cls.MAX_ATTEMPTS < 1:
            raise ValueError(f"SEO_MAX_ATTEMPTS must be >= 1, got {cls.MAX_ATTEMPTS}")
        if cls.BASE_DELAY_MS < 0:
            raise ValueError(f"SEO_BASE_DELAY_MS must be >= 0, got {cls.BASE_DELAY_MS}")
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError(f"SEO_REQUEST_TIMEOUT must be > 0, got {cls.REQUEST_TIMEOUT}")
