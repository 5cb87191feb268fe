"""
GitHub REST API client for github-forge.
"""

from exceptions.forge_exceptions import ForgeAPIError
from .cache import ResponseCache, make_cache_key
from .client import ForgeClient


def create_client(token=None, use_cache=True, credentials_manager=None, **kwargs):
    """Build a ForgeClient from stored credentials.

    The token comes from the argument, else from the credentials manager
    (keyring, config file, then GITHUB_TOKEN). With use_cache, every fetch is
    memoized in a fresh ResponseCache for the configured TTL.

    Raises:
        ValueError: when no token can be found
    """
    from config.credentials_manager import CredentialsManager

    credentials_manager = credentials_manager or CredentialsManager()
    if not token:
        _, token = credentials_manager.get_github_credentials()
    if not token:
        raise ValueError("No GitHub token configured. Set GITHUB_TOKEN or run 'forge token'.")

    if use_cache and "cache" not in kwargs:
        ttl = credentials_manager.get_cache_ttl()
        kwargs["cache"] = ResponseCache(ttl=ttl)
        kwargs.setdefault("cache_ttl", ttl)
    return ForgeClient(token, **kwargs)
