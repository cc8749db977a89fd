"""Triggering-event model.

Only the handful of payload fields that decide how changed files are
retrieved are kept. The payload is read once, explicitly, and passed to the
runner as a value.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from changed_paths.config import Settings
from changed_paths.errors import PreconditionError

logger = logging.getLogger(__name__)

NULL_SHA = "0" * 40


class Repository(BaseModel):
    """Repository identity."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class TriggerEvent(BaseModel):
    """The fields of a workflow event that select a retrieval strategy."""

    repository: Repository | None = Field(default=None, description="Repository, if resolvable")
    pull_request_number: int | None = Field(default=None, description="PR number, if any")
    ref: str = Field(default="", description="Ref that triggered the workflow")
    sha: str = Field(default="", description="Commit SHA that triggered the workflow")
    before: str | None = Field(default=None, description="Head SHA before a push")
    after: str | None = Field(default=None, description="Head SHA after a push")

    @property
    def has_commit_range(self) -> bool:
        """True when before/after describe a comparable push range."""
        return bool(self.before) and bool(self.after) and self.before != NULL_SHA

    def with_overrides(
        self, *, ref: str | None = None, repository: str | None = None
    ) -> TriggerEvent:
        """Copy with explicitly given values taking precedence over the payload."""
        update: dict[str, Any] = {}
        if ref:
            update["ref"] = ref
        if repository:
            update["repository"] = _repository_from(None, repository)
        return self.model_copy(update=update)

    @classmethod
    def from_payload(
        cls,
        payload: dict[str, Any],
        *,
        repository: str = "",
        ref: str = "",
        sha: str = "",
    ) -> TriggerEvent:
        """Build an event from a webhook payload.

        ``repository`` (``owner/name``), ``ref`` and ``sha`` are the workflow
        environment values, used when the payload does not carry them.
        """
        pull_request = payload.get("pull_request")
        number = pull_request.get("number") if isinstance(pull_request, dict) else None
        if number is None:
            number = payload.get("number")

        return cls(
            repository=_repository_from(payload.get("repository"), repository),
            pull_request_number=number,
            ref=payload.get("ref") or ref,
            sha=sha or payload.get("after") or "",
            before=payload.get("before") or None,
            after=payload.get("after") or None,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> TriggerEvent:
        """Load the event payload named by ``GITHUB_EVENT_PATH``.

        Raises:
            PreconditionError: If the payload file cannot be read or decoded.
        """
        payload: dict[str, Any] = {}
        if settings.event_path:
            path = Path(settings.event_path)
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise PreconditionError(f"Cannot read event payload {path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise PreconditionError(f"Event payload {path} is not a JSON object")
        else:
            logger.debug("GITHUB_EVENT_PATH not set; using workflow environment only")

        return cls.from_payload(
            payload,
            repository=settings.repository,
            ref=settings.ref,
            sha=settings.sha,
        )


def _repository_from(data: Any, fallback: str) -> Repository | None:
    """Resolve repository identity from the payload, then ``owner/name``."""
    if isinstance(data, dict):
        owner = data.get("owner")
        login = owner.get("login") if isinstance(owner, dict) else None
        name = data.get("name")
        if login and name:
            return Repository(owner=login, name=name)

    owner_name, sep, name = fallback.partition("/")
    if sep and owner_name and name:
        return Repository(owner=owner_name, name=name)
    return None
