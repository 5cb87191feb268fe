import logging
import requests
from urllib.parse import quote
from requests.exceptions import RequestException
from config.settings import (
    GITHUB_API_URL,
    GITHUB_ACCEPT,
    GITHUB_API_VERSION,
    GITHUB_TIMEOUT,
    GITHUB_MAX_PER_PAGE,
    DEFAULT_PER_PAGE,
    CACHE_TTL,
)
from exceptions.forge_exceptions import ForgeAPIError
from forge.cache import make_cache_key, is_unset

logger = logging.getLogger(__name__)


def _segment(value):
    """Quote a user-supplied value as a single URL path segment."""
    return quote(str(value), safe="")


class ForgeClient:
    """Client for a handful of GitHub REST API endpoints.

    Every request is an authenticated GET. Multi-page operations keep fetching
    until a page shorter than ``per_page`` comes back. Failures are logged and
    reported as ``None`` unless ``raise_on_error`` is set, in which case the
    ``ForgeAPIError`` reaches the caller.
    """

    def __init__(
        self,
        token,
        base_url=GITHUB_API_URL,
        cache=None,
        cache_ttl=CACHE_TTL,
        timeout=GITHUB_TIMEOUT,
        raise_on_error=False,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.raise_on_error = raise_on_error
        self.headers = {
            "Accept": GITHUB_ACCEPT,
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        self.session = requests.Session()

    def __repr__(self):
        return f"ForgeClient(base_url={self.base_url!r}, cached={self.cache is not None})"

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get(self, path, params=None):
        """Make a single GET request and return the decoded JSON body.

        Raises:
            ForgeAPIError: on a non-2xx status, a connection problem or a body
                that is not JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if not is_unset(v)}
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(
                url, headers=self.headers, params=params, timeout=self.timeout
            )
        except RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise ForgeAPIError(f"Failed to connect to GitHub API: {e}") from e

        if not 200 <= response.status_code < 300:
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    error_message = error_data.get("message", "Unknown error")
                else:
                    error_message = str(error_data)[:200]
            except ValueError:
                # Handle case when response is not valid JSON
                error_message = response.text[:200] if response.text else "No response body"
            message = f"GitHub API error: {response.status_code} - {error_message}"
            logger.error(f"{message} ({url})")
            raise ForgeAPIError(message, status_code=response.status_code, response=response)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise ForgeAPIError(
                f"GitHub API returned invalid JSON: {e}",
                status_code=response.status_code,
                response=response,
            ) from e

    def _fetch(self, name, path, params=None):
        """GET through the response cache when one is configured."""
        if self.cache is None:
            return self.get(path, params)
        key = make_cache_key(name, path, params)
        return self.cache.remember(key, self.cache_ttl, lambda: self.get(path, params))

    def _fetch_all_pages(self, name, path, params, per_page, page):
        """Collect items page by page until a page shorter than per_page arrives.

        A result that is an exact multiple of per_page costs one trailing
        request for the empty page that ends the loop.
        """
        if not 1 <= per_page <= GITHUB_MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {GITHUB_MAX_PER_PAGE}, got {per_page}")
        if page < 1:
            raise ValueError(f"page must be 1 or greater, got {page}")

        all_items = []
        while True:
            items = self._fetch(name, path, {**params, "per_page": per_page, "page": page})
            if not isinstance(items, list):
                raise ForgeAPIError(f"Expected a list from {path}, got {type(items).__name__}")
            all_items.extend(items)
            logger.debug(f"{name}: page {page} returned {len(items)} items")
            if len(items) != per_page:
                break
            page += 1
        return all_items

    def _call(self, description, func, *args):
        logger.info(f"Fetching {description}")
        try:
            return func(*args)
        except ForgeAPIError as e:
            logger.error(f"Failed to fetch {description}: {e}")
            if self.raise_on_error:
                raise
            return None

    def get_user(self, username):
        """Get information about a GitHub user."""
        return self._call(
            f"user {username}", self._fetch, "get_user", f"users/{_segment(username)}"
        )

    def get_repositories(
        self,
        username,
        type="all",
        sort="full_name",
        direction="asc",
        per_page=DEFAULT_PER_PAGE,
        page=1,
    ):
        """
        Get every repository of a GitHub user, starting at ``page``.

        Args:
            username (str): The username of the GitHub user
            type (str): all, owner or member
            sort (str): created, updated, pushed or full_name
            direction (str): asc or desc
            per_page (int): Number of results per page
            page (int): First page to fetch

        Returns:
            list: Repositories, or None on failure
        """
        params = {"type": type, "sort": sort, "direction": direction}
        return self._call(
            f"repositories for {username}",
            self._fetch_all_pages,
            "get_repositories",
            f"users/{_segment(username)}/repos",
            params,
            per_page,
            page,
        )

    def get_repository(self, owner, repo):
        """Get a single repository."""
        return self._call(
            f"repository {owner}/{repo}",
            self._fetch,
            "get_repository",
            f"repos/{_segment(owner)}/{_segment(repo)}",
        )

    def get_commits_from_repository(
        self,
        owner,
        repo,
        sha=None,
        path=None,
        author=None,
        since=None,
        until=None,
        per_page=DEFAULT_PER_PAGE,
        page=1,
    ):
        """
        Get commits from a repository.

        Args:
            owner (str): Repository owner
            repo (str): Repository name
            sha (str, optional): SHA or branch to start listing commits from
            path (str, optional): Only commits touching this file path
            author (str, optional): GitHub login or email of the commit author
            since (str, optional): ISO 8601 timestamp, only commits after it
            until (str, optional): ISO 8601 timestamp, only commits before it
            per_page (int): Number of results per page
            page (int): First page to fetch

        Returns:
            list: Commits, or None on failure
        """
        params = {"sha": sha, "path": path, "author": author, "since": since, "until": until}
        return self._call(
            f"commits for {owner}/{repo}",
            self._fetch_all_pages,
            "get_commits_from_repository",
            f"repos/{_segment(owner)}/{_segment(repo)}/commits",
            params,
            per_page,
            page,
        )

    def get_contributors(self, owner, repo):
        """Get the contributors of a repository."""
        return self._call(
            f"contributors for {owner}/{repo}",
            self._fetch,
            "get_contributors",
            f"repos/{_segment(owner)}/{_segment(repo)}/contributors",
        )

    def get_issues(self, owner, repo, state="open", per_page=DEFAULT_PER_PAGE, page=1):
        """Get issues from a repository; state is open, closed or all."""
        return self._call(
            f"{state} issues for {owner}/{repo}",
            self._fetch_all_pages,
            "get_issues",
            f"repos/{_segment(owner)}/{_segment(repo)}/issues",
            {"state": state},
            per_page,
            page,
        )

    def get_pull_requests(self, owner, repo, per_page=DEFAULT_PER_PAGE, page=1):
        """Get pull requests from a repository."""
        return self._call(
            f"pull requests for {owner}/{repo}",
            self._fetch_all_pages,
            "get_pull_requests",
            f"repos/{_segment(owner)}/{_segment(repo)}/pulls",
            {},
            per_page,
            page,
        )
