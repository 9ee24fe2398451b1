"""
Parser settings.
Defaults for every parser instance, loaded from environment variables or a .env file.
Explicit arguments passed to a parser always win over these values.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_START = "[["
DEFAULT_END = "]]"
DEFAULT_MAX_PASSES = 100


def get_str_from_env(env_var: str, default: str) -> str:
    """Get a string from environment variable or use default."""
    env_value = os.environ.get(env_var)
    if env_value:
        return env_value
    return default


def get_max_passes_from_env(env_var: str, default: int | None) -> int | None:
    """
    Get the pass limit from environment variable or use default.
    "0" or "none" disables the limit.
    """
    env_value = os.environ.get(env_var)
    if env_value is None or env_value.strip() == "":
        return default
    if env_value.strip().lower() in ("0", "none"):
        return None
    try:
        value = int(env_value)
    except ValueError:
        raise ValueError(
            f"{env_var} must be a positive integer, 0 or 'none' (got {env_value!r})"
        ) from None
    if value < 0:
        raise ValueError(f"{env_var} must not be negative (got {value})")
    return value


@dataclass
class ParserSettings:
    # Delimiters - can be overridden via environment variables
    start: str = field(default_factory=lambda: get_str_from_env("SHORTCODE_START", DEFAULT_START))
    end: str = field(default_factory=lambda: get_str_from_env("SHORTCODE_END", DEFAULT_END))

    # Maximum number of text-changing passes per parse, None for no limit
    max_passes: int | None = field(
        default_factory=lambda: get_max_passes_from_env("SHORTCODE_MAX_PASSES", DEFAULT_MAX_PASSES)
    )


SETTINGS = ParserSettings()
