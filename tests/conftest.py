"""Shared fixtures for changed-paths tests."""

import os

import pytest

from changed_paths.config import reset_settings
from changed_paths.retriever import FilePage

_ENV_PREFIXES = ("INPUT_", "GITHUB_", "CHANGED_PATHS_")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from a surrounding CI runner's environment."""
    for name in list(os.environ):
        if name.upper().startswith(_ENV_PREFIXES) or name.upper() == "LOG_LEVEL":
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class FakeProvider:
    """In-memory ChangeSetProvider serving pre-split pages.

    Records every call as ``(method, args..., page)``.
    """

    def __init__(self, pages: list[list[str]] | None = None, fail_on_page: int | None = None):
        self.pages = pages if pages is not None else [[]]
        self.fail_on_page = fail_on_page
        self.calls: list[tuple] = []

    def _page(self, page: int) -> FilePage:
        if page == self.fail_on_page:
            raise ConnectionError(f"page {page} unavailable")
        filenames = self.pages[page - 1] if page <= len(self.pages) else []
        return FilePage(filenames=list(filenames), has_next_page=page < len(self.pages))

    def list_pull_request_files(self, owner, repo, pull_number, page):
        self.calls.append(("pulls", owner, repo, pull_number, page))
        return self._page(page)

    def compare_commits(self, owner, repo, base, head, page):
        self.calls.append(("compare", owner, repo, base, head, page))
        return self._page(page)

    def get_commit(self, owner, repo, ref, page):
        self.calls.append(("commit", owner, repo, ref, page))
        return self._page(page)


class MemorySink:
    """Collects outputs in emission order."""

    def __init__(self):
        self.outputs: dict[str, bool] = {}

    def set_output(self, name, value):
        self.outputs[name] = value


@pytest.fixture
def changed_files():
    return [
        "folder-1/sub-folder-1/file.txt",
        "folder-1/sub-folder-2/file.txt",
        "folder-2/sub-folder-1/file.txt",
    ]


@pytest.fixture
def provider(changed_files):
    return FakeProvider([changed_files])


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider
