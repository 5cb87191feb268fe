import json
import logging
import keyring
from keyring.errors import KeyringError
from config.settings import CONFIG_DIR, CACHE_TTL, validate_config
from utils.env_loader import load_environment_variables

logger = logging.getLogger(__name__)


class CredentialsManager:
    """Manages storage and retrieval of the GitHub token and client settings."""

    SERVICE_NAME = "github_forge"
    GITHUB_KEY = "github_token"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._ensure_config_file_exists()
        self.env_vars = load_environment_variables()

    def _ensure_config_file_exists(self):
        """Ensure the configuration file exists with default values."""
        if not self.CONFIG_FILE.exists():
            default_config = {"github_username": "", "cache_ttl": CACHE_TTL}
            self.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
            self.CONFIG_FILE.write_text(json.dumps(default_config, indent=2))
            logger.info(f"Created default configuration file at {self.CONFIG_FILE}")

    def save_github_token(self, token, username=""):
        """Save the GitHub token, preferring the system keyring."""
        config = self._load_config()
        if username:
            config["github_username"] = username

        try:
            keyring.set_password(self.SERVICE_NAME, self.GITHUB_KEY, token)
            # Drop any plaintext copy left over from an earlier fallback
            config.pop("github_token", None)
        except KeyringError as e:
            logger.warning(f"Keyring failed, storing token in config file: {e}")
            config["github_token"] = token

        self._save_config(config)
        logger.info("Saved GitHub token" + (f" for user {username}" if username else ""))

    def get_github_credentials(self):
        """Get GitHub credentials with config file and environment fallback.

        Returns:
            tuple: (username, token); token is None when nothing is configured
        """
        config = self._load_config()
        username = config.get("github_username", "") or self.env_vars.get("github_username", "")
        token = None

        try:
            token = keyring.get_password(self.SERVICE_NAME, self.GITHUB_KEY)
        except KeyringError as e:
            logger.warning(f"Error accessing keyring: {e}")

        # If not found in keyring, try config file
        if not token and config.get("github_token"):
            token = config.get("github_token")
            logger.info("Using GitHub token from config file")

        # If still not found, check environment variable
        if not token and self.env_vars.get("github_token"):
            token = self.env_vars.get("github_token")
            logger.info("Using GitHub token from environment variables")

        return username, token

    def get_cache_ttl(self):
        """Get the response cache TTL in seconds (environment wins over config file)."""
        value = self.env_vars.get("cache_ttl") or self._load_config().get("cache_ttl", CACHE_TTL)
        return validate_config("CACHE_TTL", value)

    def _load_config(self):
        """Load configuration from file."""
        try:
            if self.CONFIG_FILE.exists():
                return json.loads(self.CONFIG_FILE.read_text())
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config: {e}")
        return {"github_username": ""}

    def _save_config(self, config):
        """Save configuration to file."""
        try:
            self.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
            self.CONFIG_FILE.write_text(json.dumps(config, indent=2))
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
