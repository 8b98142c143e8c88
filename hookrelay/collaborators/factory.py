"""Build collaborator implementations from settings."""

import logging
from dataclasses import dataclass

from hookrelay.config import Settings

from .base import EventLogger, Notifier, PipelineTrigger
from .event_log import JsonlEventLogger
from .pipeline import HttpPipelineTrigger, LoggingPipelineTrigger, RabbitMQPipelineTrigger
from .slack import LoggingNotifier, SlackNotifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collaborators:
    event_logger: EventLogger
    notifier: Notifier
    pipeline_trigger: PipelineTrigger


def build_pipeline_trigger(settings: Settings) -> PipelineTrigger:
    if settings.pipeline_backend == "http":
        return HttpPipelineTrigger(
            settings.cicd_url, token=settings.cicd_token, timeout=settings.cicd_timeout
        )
    return RabbitMQPipelineTrigger(settings.rabbitmq_url, settings.pipeline_queue)


def build_collaborators(settings: Settings) -> Collaborators:
    """Select collaborator implementations for the current settings.

    In dev mode Slack and the pipeline are replaced by log-only stand-ins;
    the event log is always written.

    Raises:
        ValueError: If a required endpoint is not configured.
    """
    event_logger = JsonlEventLogger(settings.event_log_path)

    if settings.dev_mode:
        logger.info("Running in dev mode - notifications and triggers are logged only")
        return Collaborators(event_logger, LoggingNotifier(), LoggingPipelineTrigger())

    return Collaborators(
        event_logger=event_logger,
        notifier=SlackNotifier(settings.slack_webhook_url, timeout=settings.slack_timeout),
        pipeline_trigger=build_pipeline_trigger(settings),
    )
