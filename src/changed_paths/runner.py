"""Evaluation run: parse → resolve → retrieve → evaluate → emit."""

from __future__ import annotations

import logging

from changed_paths.config import Settings
from changed_paths.errors import ConfigurationError, PreconditionError
from changed_paths.evaluator import evaluate
from changed_paths.event import TriggerEvent
from changed_paths.outputs import OutputSink
from changed_paths.patterns import NamedPatterns, parse_patterns
from changed_paths.retriever import ChangeSetProvider, retrieve, select_strategy

logger = logging.getLogger(__name__)


def run(
    settings: Settings,
    event: TriggerEvent,
    provider: ChangeSetProvider,
    sink: OutputSink,
) -> dict[str, bool]:
    """Evaluate the configured patterns against the event's changed files.

    Outputs are emitted only after every step has succeeded; on failure
    nothing is written.

    Raises:
        ConfigurationError: Missing inputs or an invalid pattern.
        PreconditionError: The event does not identify a repository.
        RetrievalError: The change set could not be fetched completely.
    """
    if not settings.paths.strip():
        raise ConfigurationError("Input required and not supplied: paths")
    if not settings.github_token:
        raise ConfigurationError("Input required and not supplied: github-token")

    patterns = parse_patterns(settings.paths, settings.match_mode)
    mode = "named" if isinstance(patterns, NamedPatterns) else "unnamed"
    logger.debug("Pattern spec parsed in %s mode", mode)

    if event.repository is None:
        raise PreconditionError(
            "Could not determine the repository from the triggering event; "
            "set GITHUB_REPOSITORY or provide a payload with repository details"
        )

    context = select_strategy(event)
    logger.debug("Retrieval context: %r", context)
    changes = retrieve(provider, event.repository, context, max_pages=settings.max_pages)
    logger.info("Found %d changed file(s)", len(changes))

    results = evaluate(patterns, changes)
    for name, value in results.items():
        sink.set_output(name, value)
    return results
