# termspotter/Configuration.py
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import find_dotenv, load_dotenv

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "matching": {
        "max_window_words": 5,
        "significant_words": 3,
        "proximity_chars": 50,
        "min_significant_word_length": 3,
        "suffix_words": ["theory", "duality", "principle", "equation", "law", "effect", "model"],
    },
    "timing": {
        "display_duration_ms": 5000,
        "cooldown_ms": 10000,
    },
    "history": {
        "max_recent_terms": 10,
    },
    "display": {
        "max_definition_chars": 100,
    },
}

# environment variable -> (section, key)
ENV_OVERRIDES: Dict[str, tuple[str, str]] = {
    "TERMSPOTTER_DISPLAY_DURATION_MS": ("timing", "display_duration_ms"),
    "TERMSPOTTER_COOLDOWN_MS": ("timing", "cooldown_ms"),
    "TERMSPOTTER_MAX_WINDOW_WORDS": ("matching", "max_window_words"),
}

_POSITIVE_INTS: tuple[tuple[str, str], ...] = (
    ("matching", "max_window_words"),
    ("matching", "significant_words"),
    ("matching", "proximity_chars"),
    ("matching", "min_significant_word_length"),
    ("timing", "display_duration_ms"),
    ("timing", "cooldown_ms"),
    ("history", "max_recent_terms"),
    ("display", "max_definition_chars"),
)


class ConfigurationError(ValueError):
    """Raised for malformed configuration files or values."""


def load_config(config_path: Optional[Union[str, Path]] = None, use_env: bool = True) -> Dict:
    """Load configuration: defaults, then JSON file, then environment.

    Args:
        config_path: Optional path to a JSON configuration file
        use_env: Apply TERMSPOTTER_* environment overrides (a .env file is
            loaded first when present)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: config_path does not exist
        ConfigurationError: file is not valid JSON or values are invalid
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config root must be an object: {config_path}")
        _merge(config, loaded)

    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
        _apply_env_overrides(config)

    validate_config(config)
    return config


def _merge(base: Dict, override: Dict) -> None:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def _apply_env_overrides(config: Dict) -> None:
    for variable, (section, key) in ENV_OVERRIDES.items():
        raw = os.getenv(variable)
        if raw is None:
            continue
        try:
            value = int(raw)
        except ValueError:
            logging.warning(f"Invalid {variable} value: {raw!r} - must be a number. Keeping {config[section][key]}.")
            continue
        if value <= 0:
            logging.warning(f"Invalid {variable} value: {raw!r} - must be positive. Keeping {config[section][key]}.")
            continue
        config[section][key] = value


def validate_config(config: Dict) -> None:
    """Check numeric settings are positive integers.

    Raises:
        ConfigurationError: a setting is missing, not an integer, or not positive
    """
    for section, key in _POSITIVE_INTS:
        value = config.get(section, {}).get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{section}.{key} must be a positive integer, got {value!r}")

    suffix_words = config.get("matching", {}).get("suffix_words")
    if not isinstance(suffix_words, list) or not all(isinstance(w, str) for w in suffix_words):
        raise ConfigurationError("matching.suffix_words must be a list of strings")
