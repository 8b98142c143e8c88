"""Event routing for GitHub webhooks."""

from .rules import EventDispatcher, GitHubEventType, RoutingRule, create_default_dispatcher

__all__ = ["EventDispatcher", "GitHubEventType", "RoutingRule", "create_default_dispatcher"]
