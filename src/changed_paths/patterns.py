"""Pattern spec parsing.

A pattern spec is either a JSON object mapping output labels to a single
pattern, or a flat list of patterns separated by commas and/or newlines:

    folder-1/sub-folder-1/file.txt, folder-2/*

    {"docs": "^docs/", "src": "^src/"}

Every token is compiled as a regular expression and tested against a path
with a substring search, so ``.`` and ``*`` in a plain path keep their regex
meaning. ``literal`` mode escapes tokens first for exact substring matching.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from changed_paths.errors import ConfigurationError

logger = logging.getLogger(__name__)

MatchMode = Literal["regex", "literal"]

_LINE_SPLIT = re.compile(r"\r|\n")
# Step output ids: a letter or underscore, then letters, digits, "_" or "-".
_OUTPUT_LABEL = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")


@dataclass(frozen=True)
class MatchPattern:
    """A compiled matcher tested against one path at a time."""

    source: str
    regex: re.Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def compile(cls, source: str, mode: MatchMode = "regex") -> MatchPattern:
        """Compile a pattern token.

        Raises:
            ConfigurationError: If the token is not a valid regular expression.
        """
        expression = re.escape(source) if mode == "literal" else source
        try:
            return cls(source=source, regex=re.compile(expression))
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid pattern {source!r}: {exc} "
                "(patterns use Python regular expression syntax)"
            ) from exc

    def test(self, path: str) -> bool:
        """True if the pattern matches anywhere in ``path``."""
        return self.regex.search(path) is not None


@dataclass(frozen=True)
class UnnamedPatterns:
    """Flat pattern list; reported under a single default output."""

    patterns: tuple[MatchPattern, ...] = ()


@dataclass(frozen=True)
class NamedPatterns:
    """Label → pattern mapping; one output per label, in declaration order."""

    patterns: dict[str, MatchPattern] = field(default_factory=dict)


PatternSet = UnnamedPatterns | NamedPatterns


def parse_patterns(raw: str, mode: MatchMode = "regex") -> PatternSet:
    """Parse a raw pattern spec into a PatternSet.

    A spec that decodes to a JSON object yields NamedPatterns; anything else
    is read as a flat list. Empty tokens (trailing commas, blank lines) are
    skipped. A single invalid token fails the whole parse.

    Raises:
        ConfigurationError: If any token fails to compile or a named value
            is not a string.
    """
    mapping = _load_object(raw)
    if mapping is not None:
        return _parse_named(mapping, mode)
    return UnnamedPatterns(tuple(MatchPattern.compile(t, mode) for t in split_tokens(raw)))


def split_tokens(raw: str) -> list[str]:
    """Split a flat spec on line breaks and commas, dropping empty tokens."""
    tokens: list[str] = []
    for line in _LINE_SPLIT.split(raw):
        for piece in line.split(","):
            token = piece.strip()
            if token:
                tokens.append(token)
    return tokens


def _load_object(raw: str) -> dict | None:
    """Decode ``raw`` as a JSON object, or None if it is not one."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _parse_named(mapping: dict, mode: MatchMode) -> NamedPatterns:
    patterns: dict[str, MatchPattern] = {}
    for label, value in mapping.items():
        # Labels become output names, written as name=value lines.
        if not _OUTPUT_LABEL.fullmatch(label):
            raise ConfigurationError(
                f"Invalid output label {label!r}: use letters, digits, '_' or '-', "
                "starting with a letter or '_'"
            )
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Pattern for label {label!r} must be a string, got {type(value).__name__}"
            )
        try:
            patterns[label] = MatchPattern.compile(value, mode)
        except ConfigurationError as exc:
            raise ConfigurationError(f"Label {label!r}: {exc}") from exc
    logger.debug("Parsed %d named pattern(s): %s", len(patterns), ", ".join(patterns))
    return NamedPatterns(patterns)
