"""GitHub REST client for changed-file listings.

Implements ChangeSetProvider over a ``requests.Session``. Each call fetches
exactly one page; the retriever drives pagination by following the
``rel="next"`` entry of the ``Link`` header.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from changed_paths.config import DEFAULT_API_URL, Settings
from changed_paths.errors import RetrievalError
from changed_paths.retriever import FilePage

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"

_RETRY_STATUSES = (429, 500, 502, 503, 504)


class GitHubClient:
    """Paged access to pull-request, compare and commit file lists.

    Args:
        token: GitHub token (``GITHUB_TOKEN`` or a PAT).
        base_url: API base URL; override for GitHub Enterprise.
        per_page: Files requested per page (GitHub allows at most 100).
        timeout: Per-request timeout in seconds.
        max_retries: Retries for rate-limited or 5xx responses.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        per_page: int = 100,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._per_page = per_page
        self._timeout = timeout

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )
        retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=_RETRY_STATUSES,
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    @classmethod
    def from_settings(cls, settings: Settings) -> GitHubClient:
        return cls(
            token=settings.github_token,
            base_url=settings.api_url,
            per_page=settings.per_page,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- ChangeSetProvider --------------------------------------------------

    def list_pull_request_files(
        self, owner: str, repo: str, pull_number: int, page: int
    ) -> FilePage:
        body, has_next = self._get(f"/repos/{owner}/{repo}/pulls/{pull_number}/files", page)
        return FilePage(filenames=_filenames(body), has_next_page=has_next)

    def compare_commits(self, owner: str, repo: str, base: str, head: str, page: int) -> FilePage:
        basehead = f"{quote(base, safe='')}...{quote(head, safe='')}"
        body, has_next = self._get(f"/repos/{owner}/{repo}/compare/{basehead}", page)
        return FilePage(filenames=_filenames(_files_of(body)), has_next_page=has_next)

    def get_commit(self, owner: str, repo: str, ref: str, page: int) -> FilePage:
        body, has_next = self._get(f"/repos/{owner}/{repo}/commits/{quote(ref, safe='/')}", page)
        return FilePage(filenames=_filenames(_files_of(body)), has_next_page=has_next)

    # -- HTTP ---------------------------------------------------------------

    def _get(self, path: str, page: int) -> tuple[Any, bool]:
        """GET one page and report whether another one follows.

        Raises:
            RetrievalError: On transport failure or a non-200 response.
        """
        url = f"{self._base_url}{path}"
        params = {"per_page": self._per_page, "page": page}
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise RetrievalError(f"GitHub API GET {url} failed: {exc}") from exc

        if resp.status_code != 200:
            raise RetrievalError(
                f"GitHub API GET {url} returned {resp.status_code}: {_error_message(resp)}"
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise RetrievalError(f"GitHub API GET {url} returned invalid JSON") from exc

        has_next = has_next_link(resp.headers.get("Link", ""))
        return body, has_next


def has_next_link(link_header: str) -> bool:
    """True if a ``Link`` header carries a ``rel="next"`` entry."""
    if not link_header:
        return False
    for part in link_header.split(","):
        if 'rel="next"' in part:
            return True
    return False


def _files_of(body: Any) -> list[dict[str, Any]]:
    """The ``files`` array of a compare or commit response."""
    if isinstance(body, dict):
        files = body.get("files")
        if isinstance(files, list):
            return files
    return []


def _filenames(entries: Any) -> list[str]:
    if not isinstance(entries, list):
        raise RetrievalError(f"Expected a list of files, got {type(entries).__name__}")
    return [e["filename"] for e in entries if isinstance(e, dict) and "filename" in e]


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.text[:200]
