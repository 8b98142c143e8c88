"""Typed event envelopes, one frozen dataclass per supported GitHub event.

Payloads are parsed into these once at the webhook boundary (see
:mod:`hookrelay.events.parsing`) so the router only ever reads typed fields.
The untouched webhook body rides along in ``raw_payload`` for the event log;
it takes no part in equality.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Tuple, Union


@dataclass(frozen=True)
class Commit:
    """Paths touched by one commit of a push."""

    added_paths: FrozenSet[str] = frozenset()
    modified_paths: FrozenSet[str] = frozenset()

    @property
    def changed_paths(self) -> FrozenSet[str]:
        """Added and modified paths together; removals are not inspected."""
        return self.added_paths | self.modified_paths


@dataclass(frozen=True)
class PushEvent:
    """A push to a branch."""

    kind: ClassVar[str] = "push"

    branch: str
    repository: str
    pusher_name: str
    head_commit_sha: str
    commits: Tuple[Commit, ...] = field(default_factory=tuple)
    raw_payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class PullRequestEvent:
    """A pull request activity (opened, closed, labeled, ...)."""

    kind: ClassVar[str] = "pull_request"

    action: str
    number: int
    title: str
    base_branch: str
    head_branch: str
    author_login: str
    repository: str
    merged: bool = False
    raw_payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class IssueCommentEvent:
    """A comment on an issue or pull request."""

    kind: ClassVar[str] = "issue_comment"

    action: str
    issue_number: int
    repository: str
    comment_body: str
    comment_author_login: str
    raw_payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class SecurityAdvisoryEvent:
    kind: ClassVar[str] = "security_advisory"

    action: str
    repository: str
    summary: str
    raw_payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class VulnerabilityAlertEvent:
    kind: ClassVar[str] = "repository_vulnerability_alert"

    action: str
    repository: str
    package_name: str
    raw_payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


Envelope = Union[
    PushEvent,
    PullRequestEvent,
    IssueCommentEvent,
    SecurityAdvisoryEvent,
    VulnerabilityAlertEvent,
]


def envelope_to_dict(event: Envelope) -> Dict[str, Any]:
    """Convert an envelope into JSON-friendly primitives.

    Path sets become sorted lists so the output is stable.
    """
    data = asdict(event)
    data.pop("raw_payload", None)
    for commit in data.get("commits", ()):
        commit["added_paths"] = sorted(commit["added_paths"])
        commit["modified_paths"] = sorted(commit["modified_paths"])
    if "commits" in data:
        data["commits"] = list(data["commits"])
    return data
