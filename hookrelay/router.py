"""Event router: classify GitHub events and dispatch to collaborators.

Each handler records the event, evaluates a small rule and then notifies
and/or triggers the pipeline. Steps run strictly in order and every
collaborator call is awaited before the next one starts. Collaborator
failures are not caught here: they abort the handler and reach the caller
unchanged.
"""

import logging
from typing import AbstractSet, Iterable

from hookrelay.collaborators.base import (
    EventLogger,
    Notifier,
    PipelineRequest,
    PipelineTrigger,
)
from hookrelay.events import (
    Commit,
    Envelope,
    IssueCommentEvent,
    PullRequestEvent,
    PushEvent,
    SecurityAdvisoryEvent,
    VulnerabilityAlertEvent,
)

logger = logging.getLogger(__name__)


def has_sensitive_changes(commits: Iterable[Commit], sensitive_files: AbstractSet[str]) -> bool:
    """True if any commit adds or modifies a path that is exactly a sensitive name."""
    return any(
        not commit.changed_paths.isdisjoint(sensitive_files) for commit in commits
    )


class EventRouter:
    """Routes typed GitHub events to the logger, notifier and pipeline trigger.

    Args:
        event_logger: Records each handled event.
        notifier: Sends operational alerts.
        pipeline_trigger: Starts downstream builds for pushes.
        sensitive_files: File names whose addition or modification raises an
            alert. Matched exactly and case-sensitively.
        always_log: Record issue comment, advisory and vulnerability events
            whatever their action. By default only the actions that notify
            are recorded for those three kinds.
    """

    def __init__(
        self,
        event_logger: EventLogger,
        notifier: Notifier,
        pipeline_trigger: PipelineTrigger,
        sensitive_files: Iterable[str],
        always_log: bool = False,
    ):
        self.event_logger = event_logger
        self.notifier = notifier
        self.pipeline_trigger = pipeline_trigger
        self.sensitive_files = frozenset(sensitive_files)
        self.always_log = always_log

    async def _record(self, event: Envelope) -> None:
        await self.event_logger.log_event(event.kind, event)

    async def handle_push(self, event: PushEvent) -> None:
        logger.info(
            f"Handling push event for branch: {event.branch} "
            f"in repository: {event.repository}"
        )
        await self._record(event)

        if has_sensitive_changes(event.commits, self.sensitive_files):
            logger.warning(
                f"Sensitive changes detected on {event.repository}@{event.branch}"
            )
            await self.notifier.notify(
                f"🚨 Sensitive changes detected on branch {event.branch} "
                f"in {event.repository} by {event.pusher_name}"
            )

        await self.pipeline_trigger.trigger(
            PipelineRequest(
                repository=event.repository,
                branch=event.branch,
                commit=event.head_commit_sha,
                author=event.pusher_name,
            )
        )

    async def handle_pull_request(self, event: PullRequestEvent) -> None:
        logger.info(
            f"Handling pull request event: {event.action} for PR #{event.number} "
            f"in repository: {event.repository}"
        )
        await self._record(event)

        if event.action in ("opened", "reopened"):
            await self.notifier.notify(
                f"📝 New PR #{event.number}: {event.title} in {event.repository}"
            )
        elif event.action == "closed":
            if event.merged:
                await self.notifier.notify(
                    f"✅ PR #{event.number} merged in {event.repository}"
                )
        else:
            logger.info(f"Unhandled pull request action: {event.action}")

    async def handle_issue_comment(self, event: IssueCommentEvent) -> None:
        logger.info(
            f"Handling issue comment event: {event.action} on issue "
            f"#{event.issue_number} in repository: {event.repository}"
        )
        if event.action == "created":
            await self._record(event)
            await self.notifier.notify(
                f"💬 New comment on issue #{event.issue_number} in {event.repository}: "
                f'"{event.comment_body}" by {event.comment_author_login}'
            )
        elif self.always_log:
            await self._record(event)

    async def handle_security_advisory(self, event: SecurityAdvisoryEvent) -> None:
        logger.info(
            f"Handling security advisory event: {event.action} "
            f"in repository: {event.repository}"
        )
        if event.action == "published":
            await self._record(event)
            await self.notifier.notify(
                f"🚨 Security advisory published in {event.repository}: {event.summary}"
            )
        elif self.always_log:
            await self._record(event)

    async def handle_repository_vulnerability_alert(
        self, event: VulnerabilityAlertEvent
    ) -> None:
        logger.info(
            f"Handling repository vulnerability alert: {event.action} "
            f"in repository: {event.repository}"
        )
        if event.action == "created":
            await self._record(event)
            await self.notifier.notify(
                f"🔒 New vulnerability alert in {event.repository} "
                f"for {event.package_name}"
            )
        elif self.always_log:
            await self._record(event)
