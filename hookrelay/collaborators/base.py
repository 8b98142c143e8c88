"""Interfaces of the external collaborators the event router calls."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Protocol

from hookrelay.events import Envelope


@dataclass(frozen=True)
class PipelineRequest:
    """What the downstream build/deploy pipeline is asked to run."""

    repository: str
    branch: str
    commit: str
    author: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EventLogger(Protocol):
    """Records every routed event; failures propagate to the caller."""

    async def log_event(self, event_kind: str, event: Envelope) -> None:
        ...


class Notifier(Protocol):
    """Delivers a human-readable alert to an operational channel."""

    async def notify(self, message: str) -> None:
        ...


class PipelineTrigger(Protocol):
    """Starts a downstream build or deploy."""

    async def trigger(self, request: PipelineRequest) -> None:
        ...
