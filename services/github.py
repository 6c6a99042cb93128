"""GitHub contents API client — list a repository directory, fetch file bodies."""

import json
import urllib.error
import urllib.parse
import urllib.request

_DEFAULT_API_URL = "https://api.github.com"


class RepositoryError(Exception):
    """Listing or fetching repository content failed."""


class RepositoryClient:
    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        api_url: str = _DEFAULT_API_URL,
        timeout: int = 10,
    ):
        self.owner = owner
        self.repo = repo
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def _get(self, path: str):
        quoted = urllib.parse.quote(path.strip("/"))
        url = f"{self._api_url}/repos/{self.owner}/{self.repo}/contents/{quoted}"
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "oep-index/1.0",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        req = urllib.request.Request(url, headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return json.loads(resp.read())
        except urllib.error.HTTPError as e:
            raise RepositoryError(f"GET {url} failed: HTTP {e.code}") from e
        except urllib.error.URLError as e:
            raise RepositoryError(f"GET {url} failed: {e.reason}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"GET {url} failed: {e}") from e

    def list_contents(self, path: str = ""):
        """Directory listing: a list of entries with name/path/type keys.

        A file path returns a single dict instead, which callers treat as no listing.
        """
        return self._get(path)

    def get_content(self, path: str) -> dict:
        """File entry with base64 `content` and its `encoding`."""
        data = self._get(path)
        if not isinstance(data, dict):
            raise RepositoryError(f"Expected a file at {path!r}, got a directory listing")
        return data
