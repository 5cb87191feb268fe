import os
import logging
from pathlib import Path

# Base directories
APP_DIR = Path(os.path.expanduser("~/.github_forge"))
LOG_DIR = APP_DIR / "logs"
CONFIG_DIR = APP_DIR / "config"

# Configuration validation settings
CONFIG_VALIDATION = {
    "GITHUB_TIMEOUT": {"type": "int", "min": 1, "max": 300},
    "DEFAULT_PER_PAGE": {"type": "int", "min": 1, "max": 100},
    "CACHE_TTL": {"type": "int", "min": 1, "max": 7 * 24 * 3600},
    "CACHE_MAX_SIZE": {"type": "int", "min": 1, "max": 1_000_000},
    "LOG_LEVEL": {"type": "enum", "values": [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR]},
    "MAX_LOG_SIZE": {"type": "int", "min": 1024 * 1024, "max": 100 * 1024 * 1024},
}


# Function to validate a configuration value
def validate_config(name, value):
    """Validate a configuration value against its schema."""
    if name not in CONFIG_VALIDATION:
        return value  # No validation defined

    schema = CONFIG_VALIDATION[name]
    if schema["type"] == "int":
        if not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                logging.warning(f"Invalid value for {name}: {value}. Using default.")
                return globals()[name]  # Return the default

        # Check bounds
        if "min" in schema and value < schema["min"]:
            logging.warning(f"Value for {name} too small: {value}. Using minimum: {schema['min']}")
            return schema["min"]
        if "max" in schema and value > schema["max"]:
            logging.warning(f"Value for {name} too large: {value}. Using maximum: {schema['max']}")
            return schema["max"]

    elif schema["type"] == "enum" and value not in schema["values"]:
        logging.warning(f"Invalid value for {name}: {value}. Using default.")
        return globals()[name]

    return value


# Ensure directories exist
try:
    for directory in [APP_DIR, LOG_DIR, CONFIG_DIR]:
        directory.mkdir(exist_ok=True, parents=True)
except OSError as e:
    logging.error(f"Error creating directories: {e}")

# GitHub API settings
GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_TIMEOUT = 30
GITHUB_MAX_PER_PAGE = 100
DEFAULT_PER_PAGE = 25

# Response cache settings
CACHE_TTL = 3600  # seconds
CACHE_MAX_SIZE = 1024  # entries

# Logging settings
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = logging.INFO
LOG_FILE = LOG_DIR / "forge.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 3
