import os
import dotenv
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


def load_environment_variables():
    """
    Load environment variables from .env file and system environment.

    Returns:
        dict: Dictionary of environment variables
    """
    # Try to load from .env file if it exists
    env_file = Path(".env")
    if env_file.exists():
        dotenv.load_dotenv()
        logger.info("Loaded environment variables from .env file")

    env_vars = {
        "github_token": os.environ.get("GITHUB_TOKEN", ""),
        "github_username": os.environ.get("GITHUB_USERNAME", ""),
        "cache_ttl": os.environ.get("GITHUB_FORGE_CACHE_TTL", ""),
    }

    return env_vars
