"""Match evaluation: patterns × changed paths → named booleans."""

from collections.abc import Iterable

from changed_paths.patterns import MatchPattern, NamedPatterns, PatternSet, UnnamedPatterns

DEFAULT_OUTPUT = "has-changes"


def evaluate(patterns: PatternSet, changes: list[str]) -> dict[str, bool]:
    """Evaluate a pattern set against a change set.

    Unnamed patterns produce a single ``has-changes`` entry that is true if
    any path matches any pattern. Named patterns produce one entry per label,
    each independent of the others.
    """
    if isinstance(patterns, NamedPatterns):
        return {label: any_match([p], changes) for label, p in patterns.patterns.items()}
    if isinstance(patterns, UnnamedPatterns):
        return {DEFAULT_OUTPUT: any_match(patterns.patterns, changes)}
    raise TypeError(f"Unknown pattern set: {patterns!r}")


def any_match(patterns: Iterable[MatchPattern], changes: list[str]) -> bool:
    """True if at least one (path, pattern) pair matches."""
    return any(p.test(path) for p in patterns for path in changes)
