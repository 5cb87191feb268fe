import pytest
from unittest.mock import MagicMock
from forge import create_client, ForgeClient, ResponseCache


@pytest.fixture
def credentials_manager():
    manager = MagicMock()
    manager.get_github_credentials.return_value = ("octocat", "stored_token")
    manager.get_cache_ttl.return_value = 120
    return manager


def test_create_client_uses_stored_token(credentials_manager):
    client = create_client(credentials_manager=credentials_manager)

    assert isinstance(client, ForgeClient)
    assert client.token == "stored_token"
    assert client.headers["Authorization"] == "Bearer stored_token"
    assert isinstance(client.cache, ResponseCache)
    assert client.cache_ttl == 120


def test_create_client_explicit_token_without_cache(credentials_manager):
    client = create_client(token="explicit", use_cache=False, credentials_manager=credentials_manager)

    assert client.token == "explicit"
    assert client.cache is None
    credentials_manager.get_github_credentials.assert_not_called()


def test_create_client_passes_options(credentials_manager):
    client = create_client(
        use_cache=False,
        credentials_manager=credentials_manager,
        raise_on_error=True,
        base_url="https://github.example.com/api/v3/",
    )

    assert client.raise_on_error is True
    assert client.base_url == "https://github.example.com/api/v3"


def test_create_client_without_token(credentials_manager):
    credentials_manager.get_github_credentials.return_value = ("", None)

    with pytest.raises(ValueError):
        create_client(credentials_manager=credentials_manager)
