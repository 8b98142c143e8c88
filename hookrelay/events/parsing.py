"""Parse raw GitHub webhook payloads into typed event envelopes."""

from typing import Any, Dict, Tuple

from hookrelay.errors import PayloadError

from .models import (
    Commit,
    IssueCommentEvent,
    PullRequestEvent,
    PushEvent,
    SecurityAdvisoryEvent,
    VulnerabilityAlertEvent,
)

BRANCH_REF_PREFIX = "refs/heads/"

_MISSING = object()


def _lookup(payload: Dict[str, Any], path: str) -> Any:
    """Walk a dotted path through nested dicts, returning _MISSING on a gap."""
    value: Any = payload
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return _MISSING
        value = value[key]
    return value


def require(
    payload: Dict[str, Any],
    path: str,
    event_name: str,
    expected: Tuple[type, ...] = (str,),
) -> Any:
    """Fetch a required field from a payload.

    Args:
        payload: The decoded webhook body.
        path: Dotted field path, e.g. ``repository.full_name``.
        event_name: GitHub event name, used in the error message.
        expected: Accepted value types.

    Returns:
        The field value.

    Raises:
        PayloadError: If the field is absent or of the wrong type.
    """
    value = _lookup(payload, path)
    if value is _MISSING or value is None:
        raise PayloadError(event_name, path)
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, expected) or (
        isinstance(value, bool) and bool not in expected
    ):
        raise PayloadError(event_name, path, f"not a {expected[0].__name__}")
    return value


def branch_from_ref(ref: str) -> str:
    """Strip the ``refs/heads/`` prefix from a push ref."""
    if ref.startswith(BRANCH_REF_PREFIX):
        return ref[len(BRANCH_REF_PREFIX):]
    return ref


def _path_set(commit: Dict[str, Any], key: str, event_name: str, index: int) -> frozenset:
    paths = commit.get(key) or []
    if not isinstance(paths, list):
        raise PayloadError(event_name, f"commits[{index}].{key}", "not a list")
    if not all(isinstance(p, str) for p in paths):
        raise PayloadError(event_name, f"commits[{index}].{key}", "not a list of str")
    return frozenset(paths)


def parse_push(payload: Dict[str, Any]) -> PushEvent:
    event_name = PushEvent.kind
    raw_commits = payload.get("commits") or []
    if not isinstance(raw_commits, list):
        raise PayloadError(event_name, "commits", "not a list")

    commits = []
    for index, raw in enumerate(raw_commits):
        if not isinstance(raw, dict):
            raise PayloadError(event_name, f"commits[{index}]", "not an object")
        commits.append(
            Commit(
                added_paths=_path_set(raw, "added", event_name, index),
                modified_paths=_path_set(raw, "modified", event_name, index),
            )
        )

    return PushEvent(
        branch=branch_from_ref(require(payload, "ref", event_name)),
        repository=require(payload, "repository.full_name", event_name),
        pusher_name=require(payload, "pusher.name", event_name),
        head_commit_sha=require(payload, "after", event_name),
        commits=tuple(commits),
        raw_payload=payload,
    )


def parse_pull_request(payload: Dict[str, Any]) -> PullRequestEvent:
    event_name = PullRequestEvent.kind
    merged = _lookup(payload, "pull_request.merged")
    return PullRequestEvent(
        action=require(payload, "action", event_name),
        number=require(payload, "pull_request.number", event_name, (int,)),
        title=require(payload, "pull_request.title", event_name),
        base_branch=require(payload, "pull_request.base.ref", event_name),
        head_branch=require(payload, "pull_request.head.ref", event_name),
        author_login=require(payload, "pull_request.user.login", event_name),
        repository=require(payload, "repository.full_name", event_name),
        merged=merged is True,
        raw_payload=payload,
    )


def parse_issue_comment(payload: Dict[str, Any]) -> IssueCommentEvent:
    event_name = IssueCommentEvent.kind
    return IssueCommentEvent(
        action=require(payload, "action", event_name),
        issue_number=require(payload, "issue.number", event_name, (int,)),
        repository=require(payload, "repository.full_name", event_name),
        comment_body=require(payload, "comment.body", event_name),
        comment_author_login=require(payload, "comment.user.login", event_name),
        raw_payload=payload,
    )


def parse_security_advisory(payload: Dict[str, Any]) -> SecurityAdvisoryEvent:
    event_name = SecurityAdvisoryEvent.kind
    return SecurityAdvisoryEvent(
        action=require(payload, "action", event_name),
        repository=require(payload, "repository.full_name", event_name),
        summary=require(payload, "security_advisory.summary", event_name),
        raw_payload=payload,
    )


def parse_vulnerability_alert(payload: Dict[str, Any]) -> VulnerabilityAlertEvent:
    event_name = VulnerabilityAlertEvent.kind
    # Newer payloads use affected_package_name; older ones package_name.
    package_path = "alert.affected_package_name"
    if _lookup(payload, package_path) in (_MISSING, None):
        package_path = "alert.package_name"
    return VulnerabilityAlertEvent(
        action=require(payload, "action", event_name),
        repository=require(payload, "repository.full_name", event_name),
        package_name=require(payload, package_path, event_name),
        raw_payload=payload,
    )
