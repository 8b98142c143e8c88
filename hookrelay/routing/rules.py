"""Dispatch rules for GitHub webhooks.

Each routing rule maps a GitHub event name to the parser that builds its
typed envelope and to the event router handler that acts on it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from hookrelay.errors import PayloadError, UnsupportedEventError
from hookrelay.events import Envelope
from hookrelay.events.parsing import (
    parse_issue_comment,
    parse_pull_request,
    parse_push,
    parse_security_advisory,
    parse_vulnerability_alert,
)
from hookrelay.router import EventRouter

logger = logging.getLogger(__name__)


class GitHubEventType(str, Enum):
    """GitHub webhook event names (the ``X-GitHub-Event`` header)."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    ISSUE_COMMENT = "issue_comment"
    SECURITY_ADVISORY = "security_advisory"
    REPOSITORY_VULNERABILITY_ALERT = "repository_vulnerability_alert"


@dataclass(frozen=True)
class RoutingRule:
    """Defines how an event reaches an event router handler."""

    event_type: GitHubEventType
    """The GitHub event this rule handles."""

    parser: Callable[[Dict[str, Any]], Envelope]
    """Builds the typed envelope from the webhook payload."""

    handler_name: str
    """Name of the EventRouter coroutine method that handles the envelope."""


class EventDispatcher:
    """Parses GitHub payloads and hands them to the event router."""

    def __init__(self, router: EventRouter):
        self.router = router
        self._rules: Dict[str, RoutingRule] = {}

    def register_rule(self, rule: RoutingRule) -> None:
        """Register a routing rule.

        Raises:
            ValueError: If the event already has a rule or the router has
                no such handler.
        """
        if rule.event_type.value in self._rules:
            raise ValueError(f"Event '{rule.event_type.value}' is already registered")
        if not callable(getattr(self.router, rule.handler_name, None)):
            raise ValueError(f"EventRouter has no handler '{rule.handler_name}'")
        self._rules[rule.event_type.value] = rule

    def get_rule(self, event_name: str) -> Optional[RoutingRule]:
        return self._rules.get(event_name)

    @property
    def registered_events(self) -> List[str]:
        """Get list of all registered event names."""
        return sorted(self._rules)

    async def dispatch(self, event_name: str, payload: Dict[str, Any]) -> Envelope:
        """Parse a payload and run the matching router handler.

        Args:
            event_name: The ``X-GitHub-Event`` value, e.g. ``push``.
            payload: The decoded webhook body.

        Returns:
            The envelope that was handled.

        Raises:
            UnsupportedEventError: If no rule is registered for the event.
            PayloadError: If the payload is missing a required field.
        """
        rule = self.get_rule(event_name)
        if rule is None:
            raise UnsupportedEventError(event_name)
        if not isinstance(payload, dict):
            raise PayloadError(event_name, "<body>", "not an object")

        event = rule.parser(payload)
        handler = getattr(self.router, rule.handler_name)
        await handler(event)
        return event


def create_default_dispatcher(router: EventRouter) -> EventDispatcher:
    """Create a dispatcher with one rule per supported GitHub event."""
    dispatcher = EventDispatcher(router)

    dispatcher.register_rule(
        RoutingRule(GitHubEventType.PUSH, parse_push, "handle_push")
    )
    dispatcher.register_rule(
        RoutingRule(
            GitHubEventType.PULL_REQUEST, parse_pull_request, "handle_pull_request"
        )
    )
    dispatcher.register_rule(
        RoutingRule(
            GitHubEventType.ISSUE_COMMENT, parse_issue_comment, "handle_issue_comment"
        )
    )
    dispatcher.register_rule(
        RoutingRule(
            GitHubEventType.SECURITY_ADVISORY,
            parse_security_advisory,
            "handle_security_advisory",
        )
    )
    dispatcher.register_rule(
        RoutingRule(
            GitHubEventType.REPOSITORY_VULNERABILITY_ALERT,
            parse_vulnerability_alert,
            "handle_repository_vulnerability_alert",
        )
    )

    logger.debug(f"Registered dispatch rules: {dispatcher.registered_events}")
    return dispatcher
