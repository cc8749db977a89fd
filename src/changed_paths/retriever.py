"""Change-set retrieval.

Picks one of three strategies from the triggering event and drains every
page of the matching provider call:

1. pull request number present  → files changed in the pull request
2. push with a non-null ``before`` → compare ``before...after``
3. otherwise (first push of a branch, manual runs) → the single commit at
   the current ref
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from changed_paths.errors import RetrievalError
from changed_paths.event import Repository, TriggerEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilePage:
    """One page of changed filenames."""

    filenames: list[str] = field(default_factory=list)
    has_next_page: bool = False


@runtime_checkable
class ChangeSetProvider(Protocol):
    """Paged access to the three GitHub change listings."""

    def list_pull_request_files(
        self, owner: str, repo: str, pull_number: int, page: int
    ) -> FilePage:
        """Files changed in a pull request."""
        ...

    def compare_commits(self, owner: str, repo: str, base: str, head: str, page: int) -> FilePage:
        """Files changed between two commits."""
        ...

    def get_commit(self, owner: str, repo: str, ref: str, page: int) -> FilePage:
        """Files changed by a single commit."""
        ...


# ---------------------------------------------------------------------------
# Retrieval contexts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PullRequestContext:
    number: int


@dataclass(frozen=True)
class CompareContext:
    base: str
    head: str


@dataclass(frozen=True)
class CommitContext:
    ref: str


RetrievalContext = PullRequestContext | CompareContext | CommitContext


def select_strategy(event: TriggerEvent) -> RetrievalContext:
    """Choose how to list changed files. Precedence: PR > compare > commit."""
    if event.pull_request_number is not None:
        return PullRequestContext(number=event.pull_request_number)
    if event.has_commit_range:
        return CompareContext(base=event.before, head=event.after)
    return CommitContext(ref=_commit_ref(event))


def _commit_ref(event: TriggerEvent) -> str:
    """Current ref in the form the commits endpoint accepts."""
    ref = event.ref or event.after or event.sha
    if ref.startswith("refs/"):
        # refs/heads/main → heads/main
        ref = ref[len("refs/") :]
    return ref


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------


def retrieve(
    provider: ChangeSetProvider,
    repository: Repository,
    context: RetrievalContext,
    max_pages: int = 30,
) -> list[str]:
    """Fetch every changed path for ``context``, in page order.

    Raises:
        RetrievalError: If any page fails, or more than ``max_pages`` pages
            would be needed. Partial results are never returned.
    """
    owner, repo = repository.owner, repository.name
    if isinstance(context, PullRequestContext):
        logger.info("Listing files of pull request #%d in %s", context.number, repository.full_name)

        def fetch(page: int) -> FilePage:
            return provider.list_pull_request_files(owner, repo, context.number, page)

    elif isinstance(context, CompareContext):
        logger.info(
            "Comparing %s...%s in %s", context.base[:7], context.head[:7], repository.full_name
        )

        def fetch(page: int) -> FilePage:
            return provider.compare_commits(owner, repo, context.base, context.head, page)

    elif isinstance(context, CommitContext):
        if not context.ref:
            raise RetrievalError("No ref available to look up a single commit")
        logger.info("Listing files of commit %s in %s", context.ref, repository.full_name)

        def fetch(page: int) -> FilePage:
            return provider.get_commit(owner, repo, context.ref, page)

    else:
        raise TypeError(f"Unknown retrieval context: {context!r}")

    return _drain(fetch, max_pages)


def _drain(fetch, max_pages: int) -> list[str]:
    """Request pages one at a time until the provider reports no next page."""
    filenames: list[str] = []
    page = 1
    while True:
        try:
            result = fetch(page)
        except RetrievalError:
            raise
        except Exception as exc:
            raise RetrievalError(f"Fetching page {page} failed: {exc}") from exc

        filenames.extend(result.filenames)
        logger.debug("Page %d: %d file(s)", page, len(result.filenames))

        if not result.has_next_page:
            return filenames
        if page >= max_pages:
            raise RetrievalError(
                f"Change set spans more than {max_pages} pages; "
                "raise CHANGED_PATHS_MAX_PAGES to evaluate it"
            )
        page += 1
