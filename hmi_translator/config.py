"""
Configuration module (Configuration)

Manages the settings used across the project.
- API key, model name, timeouts, run-mode defaults and reuse policies.
- API key resolution (environment, key file, prompt) and validation.

Values are read once here and passed explicitly to the objects that need
them; nothing in the package mutates this module at runtime.
"""

import os
import sys
import getpass

import requests

from .exceptions import ConfigurationError


def _env_float(name, default):
    """Reads a numeric override; None when it is not a number (see validate_config)."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return None


# ==============================================================================
# [API settings] environment variable, key file, or interactive prompt
# ==============================================================================
API_KEY_ENV_VAR = "GEMINI_API_KEY"

# Companion key file looked up next to the executable / launcher script
API_KEY_FILE_NAME = "gemini_api_key.txt"

# Lightweight endpoint used once at startup to fail fast on a bad key
API_VALIDATION_URL = "https://generativelanguage.googleapis.com/v1beta/models"
API_VALIDATION_TIMEOUT_SECONDS = 10

# ==============================================================================
# [Model settings]
# ==============================================================================
MODEL_NAME = os.environ.get("HMI_TRANSLATOR_MODEL", "gemini-2.0-flash")

# Hard timeout per translation call (seconds)
API_TIMEOUT_SECONDS = _env_float("HMI_TRANSLATOR_TIMEOUT", 5.0)

# Deterministic decoding keeps reused prefixes consistent with fresh ones
TEMPERATURE = 0
MAX_OUTPUT_TOKENS = 60

# ==============================================================================
# [Translation settings]
# ==============================================================================
# Pause after every row so the progress display stays readable
ROW_DELAY_SECONDS = _env_float("HMI_TRANSLATOR_ROW_DELAY", 0.05)

# Run modes
MODE_FULL = "full"
MODE_QUICK = "quick"
RUN_MODES = (MODE_FULL, MODE_QUICK)

# Reuse strategies
STRATEGY_ADJACENT = "adjacent"   # previous-row history (# prefix, _number suffix)
STRATEGY_PATTERN = "pattern"     # numeric-placeholder pattern cache
REUSE_STRATEGIES = (STRATEGY_ADJACENT, STRATEGY_PATTERN)

# Whether a reused (not freshly translated) row becomes the new history entry
HISTORY_TRACKS_REUSE = os.environ.get("HMI_TRANSLATOR_HISTORY_TRACKS_REUSE", "1") != "0"

# Pattern cache write policy: "first" keeps the first entry, "overwrite" replaces it
CACHE_POLICY_FIRST = "first"
CACHE_POLICY_OVERWRITE = "overwrite"
PATTERN_CACHE_POLICY = os.environ.get("HMI_TRANSLATOR_CACHE_POLICY", CACHE_POLICY_FIRST)

# ==============================================================================
# [Sheet settings]
# ==============================================================================
# 1-based defaults offered by the column picker
DEFAULT_SOURCE_COLUMN = 6
DEFAULT_TARGET_COLUMN = 7

# Columns before this 1-based index hold ids/metadata, not language text
FIRST_LANGUAGE_COLUMN = 5

# Headers starting with this prefix are reference columns
REFERENCE_COLUMN_PREFIX = "ref"

INPUT_EXTENSION = ".xlsx"
OUTPUT_PREFIX = "translated-"

# ==============================================================================
# [Glossary settings]
# ==============================================================================
GLOSSARY_FILE_NAME = "glossary.xlsx"

# Maximum number of terms injected into the prompt (token cost)
GLOSSARY_MAX_TERMS = 200

# ==============================================================================
# [Slack webhook]
# ==============================================================================
# Completion notifications are disabled when the variable is empty
SLACK_WEBHOOK_URL = os.environ.get("SLACK_WEBHOOK_URL", "")


# ==============================================================================
# [API key resolution]
# ==============================================================================
def get_executable_dir():
    """
    Returns the directory holding the executable (frozen build) or the
    launcher script.
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(os.path.abspath(sys.executable))
    return os.path.dirname(os.path.abspath(sys.argv[0]))


def read_key_file(directory=None):
    """
    Reads the API key from the companion key file.

    Args:
        directory (str, optional): Directory to look in. Defaults to the
                                   executable directory.

    Returns:
        str: The key, or an empty string when the file is missing or empty.
    """
    key_path = os.path.join(directory or get_executable_dir(), API_KEY_FILE_NAME)
    if not os.path.exists(key_path):
        return ""
    with open(key_path, encoding="utf-8") as f:
        return f.read().strip()


def resolve_api_key(directory=None, prompt=getpass.getpass):
    """
    Resolves the API key in priority order.

    1. The GEMINI_API_KEY environment variable
    2. gemini_api_key.txt next to the executable
    3. An interactive masked prompt

    Args:
        directory (str, optional): Directory holding the key file.
        prompt (callable): Masked input function.

    Returns:
        str: The API key.

    Raises:
        ConfigurationError: If no key could be obtained.
    """
    key = os.environ.get(API_KEY_ENV_VAR, "").strip()
    if key:
        return key

    key = read_key_file(directory)
    if key:
        return key

    try:
        key = prompt("Enter your Gemini API key: ").strip()
    except EOFError:
        key = ""

    if not key:
        raise ConfigurationError(
            f"No API key found. Set {API_KEY_ENV_VAR} or place {API_KEY_FILE_NAME} next to the program."
        )
    return key


def validate_api_key(api_key, session=None):
    """
    Makes one lightweight call to check the key before any row is processed.

    Args:
        api_key (str): The key to check.
        session: Optional requests session (used by tests).

    Returns:
        tuple: (success flag, message)
    """
    http = session or requests
    try:
        response = http.get(
            API_VALIDATION_URL,
            params={"key": api_key, "pageSize": 1},
            timeout=API_VALIDATION_TIMEOUT_SECONDS,
        )
    except requests.exceptions.Timeout:
        return False, f"Key validation timed out ({API_VALIDATION_TIMEOUT_SECONDS}s). Check your network connection."
    except requests.exceptions.ConnectionError:
        return False, "Could not reach the translation service. Check your network connection."

    if response.status_code in (400, 401, 403):
        return False, f"The API key was rejected (HTTP {response.status_code})."
    if response.status_code != 200:
        return False, f"Unexpected response while validating the API key (HTTP {response.status_code})."

    return True, "API key is valid."


def validate_config():
    """
    Checks the static settings.

    Returns:
        tuple: (success flag, message)
    """
    if PATTERN_CACHE_POLICY not in (CACHE_POLICY_FIRST, CACHE_POLICY_OVERWRITE):
        return False, f"Unknown pattern cache policy '{PATTERN_CACHE_POLICY}'."
    if API_TIMEOUT_SECONDS is None:
        return False, "HMI_TRANSLATOR_TIMEOUT must be a number."
    if ROW_DELAY_SECONDS is None:
        return False, "HMI_TRANSLATOR_ROW_DELAY must be a number."
    if API_TIMEOUT_SECONDS <= 0:
        return False, "API timeout must be positive."
    if ROW_DELAY_SECONDS < 0:
        return False, "Row delay must not be negative."
    return True, "Settings are valid."
