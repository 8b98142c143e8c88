"""External collaborators: event log, Slack notifier, pipeline triggers."""

from .base import EventLogger, Notifier, PipelineRequest, PipelineTrigger
from .event_log import JsonlEventLogger
from .factory import Collaborators, build_collaborators
from .pipeline import HttpPipelineTrigger, LoggingPipelineTrigger, RabbitMQPipelineTrigger
from .slack import LoggingNotifier, SlackNotifier

__all__ = [
    "Collaborators",
    "EventLogger",
    "HttpPipelineTrigger",
    "JsonlEventLogger",
    "LoggingNotifier",
    "LoggingPipelineTrigger",
    "Notifier",
    "PipelineRequest",
    "PipelineTrigger",
    "RabbitMQPipelineTrigger",
    "SlackNotifier",
    "build_collaborators",
]
