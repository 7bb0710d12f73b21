"""Core data models for rofi-tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(str, Enum):
    """Classification of an index entity."""

    FILE = "file"
    FOLDER = "folder"
    OTHER = "other"

    @property
    def is_container(self) -> bool:
        return self is EntityKind.FOLDER


class ContextMode(str, Enum):
    """What the current invocation was asked to do."""

    FRESH_QUERY = "fresh"
    DRILLDOWN = "drilldown"
    ACTION = "action"


@dataclass(frozen=True)
class Invocation:
    """One process run, as seen through argv and rofi's environment."""

    query_text: str = ""
    prior_context: str | None = None


@dataclass(frozen=True)
class Candidate:
    """A single index search hit."""

    label: str
    kind: EntityKind
    identifier: str  # entity URL, e.g. file:///home/alice/file.pdf
    title: str = ""


@dataclass(frozen=True)
class Selection:
    """The (kind, identifier) pair carried by a row token."""

    kind: EntityKind
    identifier: str


@dataclass(frozen=True)
class Context:
    """Decoded prior context.

    ``payload`` is the container URL for DRILLDOWN, the selected row for
    ACTION and None for FRESH_QUERY.
    """

    mode: ContextMode = ContextMode.FRESH_QUERY
    payload: str | Selection | None = None

    @classmethod
    def fresh(cls) -> Context:
        return cls()


@dataclass(frozen=True)
class ResultLine:
    """One row of rofi output."""

    text: str
    info_token: str = ""
    icon: str | None = None
    nonselectable: bool = False


@dataclass(frozen=True)
class OpenAction:
    """Open the entity with the desktop's default handler, then stop."""

    identifier: str


@dataclass(frozen=True)
class Narrow:
    """Drill into a container and list what it holds."""

    identifier: str


ResolverDecision = OpenAction | Narrow


@dataclass
class RunResult:
    """Everything one invocation hands back to rofi."""

    exit_code: int = 0
    lines: list[ResultLine] = field(default_factory=list)
    next_context: str | None = None
    message: str | None = None
    prompt: str | None = None
