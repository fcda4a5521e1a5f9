"""
Configuration Management

Loads configuration from .env files and provides typed config objects.
Handles the API key, audit settings, and default values.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models import Config


API_KEY_VARIABLES = (
    "AUDITOR_API_KEY",
    "OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
    "GEMINI_API_KEY",
)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from .env file and environment variables.

    Searches for .env file in:
    1. Provided env_file path
    2. Current directory
    3. User's home directory

    Environment variables override .env file values. The API key is read
    from AUDITOR_API_KEY, then the provider-specific variables.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Raises:
        pydantic.ValidationError: If a value is out of range or not allowed

    Example:
        config = load_config()
        provider = get_provider(config)
    """
    # Load .env file
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")
    elif (Path.home() / ".env").exists():
        load_dotenv(Path.home() / ".env")

    # Build config from environment
    config = Config(
        api_key=_first_env(*API_KEY_VARIABLES),
        category=os.getenv("AUDIT_CATEGORY", "general"),
        viewport=os.getenv("AUDIT_VIEWPORT", "desktop"),
        free_tier=_env_flag("AUDITOR_FREE_TIER"),
        free_tier_limit=int(os.getenv("FREE_TIER_LIMIT", "5")),
        max_concurrency=int(os.getenv("MAX_CONCURRENCY", "5")),
        output_dir=os.getenv("AUDITOR_OUTPUT_DIR", "audit_output"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return config
