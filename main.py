import sys
import json
import logging
import argparse
from utils.logging_config import setup_logging
from utils.error_handler import ErrorHandler
from config.credentials_manager import CredentialsManager
from config.settings import DEFAULT_PER_PAGE
from forge import create_client

logger = logging.getLogger(__name__)

# command -> (client method, positional args, optional args)
COMMANDS = {
    "user": ("get_user", ["username"], []),
    "repos": ("get_repositories", ["username"], ["type", "sort", "direction", "per_page", "page"]),
    "repo": ("get_repository", ["owner", "repo"], []),
    "commits": (
        "get_commits_from_repository",
        ["owner", "repo"],
        ["sha", "path", "author", "since", "until", "per_page", "page"],
    ),
    "contributors": ("get_contributors", ["owner", "repo"], []),
    "issues": ("get_issues", ["owner", "repo"], ["state", "per_page", "page"]),
    "pulls": ("get_pull_requests", ["owner", "repo"], ["per_page", "page"]),
}


def _add_paging(parser):
    parser.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE, help="Results per page (1-100)")
    parser.add_argument("--page", type=int, default=1, help="First page to fetch")


def build_parser():
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(prog="forge", description="Query the GitHub REST API")
    parser.add_argument("--token", help="GitHub token (defaults to keyring, config file, then GITHUB_TOKEN)")
    parser.add_argument("--raise-errors", action="store_true", help="Report the underlying API error instead of a generic failure")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    user_parser = subparsers.add_parser("user", help="Show a user")
    user_parser.add_argument("username")

    repos_parser = subparsers.add_parser("repos", help="List every repository of a user")
    repos_parser.add_argument("username")
    repos_parser.add_argument("--type", default="all", choices=["all", "owner", "member"])
    repos_parser.add_argument("--sort", default="full_name", choices=["created", "updated", "pushed", "full_name"])
    repos_parser.add_argument("--direction", default="asc", choices=["asc", "desc"])
    _add_paging(repos_parser)

    for name, help_text in (("repo", "Show a repository"), ("contributors", "List contributors")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("owner")
        sub.add_argument("repo")

    commits_parser = subparsers.add_parser("commits", help="List commits of a repository")
    commits_parser.add_argument("owner")
    commits_parser.add_argument("repo")
    commits_parser.add_argument("--sha", help="SHA or branch to start listing from")
    commits_parser.add_argument("--path", help="Only commits touching this path")
    commits_parser.add_argument("--author", help="GitHub login or email of the author")
    commits_parser.add_argument("--since", help="ISO 8601 timestamp")
    commits_parser.add_argument("--until", help="ISO 8601 timestamp")
    _add_paging(commits_parser)

    issues_parser = subparsers.add_parser("issues", help="List issues of a repository")
    issues_parser.add_argument("owner")
    issues_parser.add_argument("repo")
    issues_parser.add_argument("--state", default="open", choices=["open", "closed", "all"])
    _add_paging(issues_parser)

    pulls_parser = subparsers.add_parser("pulls", help="List pull requests of a repository")
    pulls_parser.add_argument("owner")
    pulls_parser.add_argument("repo")
    _add_paging(pulls_parser)

    token_parser = subparsers.add_parser("token", help="Store a GitHub token")
    token_parser.add_argument("value", help="The token to store")
    token_parser.add_argument("--username", default="", help="GitHub username to record alongside it")

    return parser


def run_command(client, args):
    """Dispatch parsed arguments to the matching client method."""
    method_name, positional, optional = COMMANDS[args.command]
    method = getattr(client, method_name)
    kwargs = {name: getattr(args, name) for name in optional}
    return method(*(getattr(args, name) for name in positional), **kwargs)


def _print_error(message):
    print(f"Error: {message}", file=sys.stderr)


def main(argv=None):
    """Main entry point for the command-line tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level))

    try:
        if args.command == "token":
            CredentialsManager().save_github_token(args.value, username=args.username)
            print("GitHub token saved.")
            return 0

        # The process exits after one command, so an in-memory cache buys nothing
        with create_client(token=args.token, use_cache=False, raise_on_error=args.raise_errors) as client:
            result = run_command(client, args)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received in main()")
        print("\nInterrupted.", file=sys.stderr)
        return 1
    except Exception as e:
        ErrorHandler.handle_exception(e, display_callback=_print_error)
        return 1

    if result is None:
        _print_error("request failed; rerun with --log-level INFO or --raise-errors for details")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
