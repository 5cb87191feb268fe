import json
import pytest
from unittest.mock import patch, MagicMock
from main import main, build_parser, run_command


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.__enter__.return_value = client
    return client


@patch("main.setup_logging")
@patch("main.create_client")
def test_main_user(mock_create_client, mock_setup_logging, mock_client, capsys):
    mock_client.get_user.return_value = {"login": "octocat"}
    mock_create_client.return_value = mock_client

    result = main(["--token", "t", "user", "octocat"])

    assert result == 0
    mock_setup_logging.assert_called_once()
    mock_create_client.assert_called_once_with(token="t", use_cache=False, raise_on_error=False)
    mock_client.get_user.assert_called_once_with("octocat")
    assert json.loads(capsys.readouterr().out) == {"login": "octocat"}


@patch("main.setup_logging")
@patch("main.create_client")
def test_main_commits_arguments(mock_create_client, mock_setup_logging, mock_client):
    mock_client.get_commits_from_repository.return_value = []
    mock_create_client.return_value = mock_client

    result = main(["commits", "octocat", "hello", "--author", "octocat", "--per-page", "50"])

    assert result == 0
    mock_client.get_commits_from_repository.assert_called_once_with(
        "octocat",
        "hello",
        sha=None,
        path=None,
        author="octocat",
        since=None,
        until=None,
        per_page=50,
        page=1,
    )


@patch("main.setup_logging")
@patch("main.create_client")
def test_main_failed_request(mock_create_client, mock_setup_logging, mock_client, capsys):
    mock_client.get_pull_requests.return_value = None
    mock_create_client.return_value = mock_client

    result = main(["pulls", "octocat", "hello"])

    assert result == 1
    assert "request failed" in capsys.readouterr().err


@patch("main.setup_logging")
@patch("main.create_client", side_effect=ValueError("No GitHub token configured."))
def test_main_without_token(mock_create_client, mock_setup_logging, capsys):
    result = main(["repo", "octocat", "hello"])

    assert result == 1
    assert "Input error: No GitHub token configured." in capsys.readouterr().err


@patch("main.setup_logging")
@patch("main.CredentialsManager")
def test_main_token(mock_credentials_manager, mock_setup_logging):
    result = main(["token", "gh_secret", "--username", "octocat"])

    assert result == 0
    mock_credentials_manager.return_value.save_github_token.assert_called_once_with(
        "gh_secret", username="octocat"
    )


def test_parser_requires_command():
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args([])
    assert excinfo.value.code == 2


def test_run_command_dispatch():
    client = MagicMock()
    args = build_parser().parse_args(["issues", "octocat", "hello", "--state", "all", "--page", "2"])

    run_command(client, args)

    client.get_issues.assert_called_once_with("octocat", "hello", state="all", per_page=25, page=2)
