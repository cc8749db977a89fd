"""Error taxonomy for changed-paths.

Every fatal failure carries the phase it happened in so the CLI can tell
the operator which step broke.
"""


class ChangedPathsError(Exception):
    """Base error for a failed evaluation."""

    phase = "evaluation"


class ConfigurationError(ChangedPathsError):
    """A required input is missing or a pattern does not compile."""

    phase = "configuration"


class PreconditionError(ChangedPathsError):
    """The triggering event does not identify a repository."""

    phase = "precondition"


class RetrievalError(ChangedPathsError):
    """Fetching the changed files from GitHub failed."""

    phase = "retrieval"
