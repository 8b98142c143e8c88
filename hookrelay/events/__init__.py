"""Typed GitHub event envelopes and their payload parsers."""

from .models import (
    Commit,
    Envelope,
    IssueCommentEvent,
    PullRequestEvent,
    PushEvent,
    SecurityAdvisoryEvent,
    VulnerabilityAlertEvent,
    envelope_to_dict,
)

__all__ = [
    "Commit",
    "Envelope",
    "IssueCommentEvent",
    "PullRequestEvent",
    "PushEvent",
    "SecurityAdvisoryEvent",
    "VulnerabilityAlertEvent",
    "envelope_to_dict",
]
