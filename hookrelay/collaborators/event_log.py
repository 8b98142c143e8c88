"""Append-only JSON Lines event log."""

import asyncio
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from hookrelay.events import Envelope, envelope_to_dict

logger = logging.getLogger(__name__)


class JsonlEventLogger:
    """Writes one JSON object per event to a file.

    Each line looks like::

        {"event": "push", "received_at": "...", "payload": {...}, "envelope": {...}}

    ``payload`` is the webhook body as received; envelopes built without one
    fall back to their parsed fields. ``envelope`` is always the parsed view.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _append(self, line: str) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")

    async def log_event(self, event_kind: str, event: Envelope) -> None:
        record = {
            "event": event_kind,
            "received_at": datetime.now(timezone.utc).isoformat(),
            "payload": event.raw_payload or envelope_to_dict(event),
            "envelope": envelope_to_dict(event),
        }
        await asyncio.to_thread(self._append, json.dumps(record))
        logger.info(f"📝 Logged {event_kind} event for {event.repository}")
