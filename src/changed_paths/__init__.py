"""changed-paths: report whether a push or pull request touched given paths."""

from changed_paths.errors import (
    ChangedPathsError,
    ConfigurationError,
    PreconditionError,
    RetrievalError,
)
from changed_paths.evaluator import DEFAULT_OUTPUT, evaluate
from changed_paths.event import NULL_SHA, Repository, TriggerEvent
from changed_paths.patterns import MatchPattern, NamedPatterns, UnnamedPatterns, parse_patterns
from changed_paths.retriever import (
    ChangeSetProvider,
    CommitContext,
    CompareContext,
    FilePage,
    PullRequestContext,
    retrieve,
    select_strategy,
)
from changed_paths.runner import run

__all__ = [
    # Errors
    "ChangedPathsError",
    "ConfigurationError",
    "PreconditionError",
    "RetrievalError",
    # Patterns
    "MatchPattern",
    "NamedPatterns",
    "UnnamedPatterns",
    "parse_patterns",
    # Event
    "NULL_SHA",
    "Repository",
    "TriggerEvent",
    # Retrieval
    "ChangeSetProvider",
    "CommitContext",
    "CompareContext",
    "FilePage",
    "PullRequestContext",
    "retrieve",
    "select_strategy",
    # Evaluation
    "DEFAULT_OUTPUT",
    "evaluate",
    "run",
]
