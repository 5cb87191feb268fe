"""
Exceptions related to GitHub API interactions.
"""


class ForgeAPIError(Exception):
    """Exception raised when a GitHub API request fails."""

    def __init__(self, message, status_code=None, response=None):
        self.status_code = status_code
        self.response = response
        super().__init__(message)
