"""Errors raised at the webhook boundary.

The event router never raises these itself; collaborator failures
propagate through it unchanged.
"""


class PayloadError(ValueError):
    """A webhook payload is missing a field or has the wrong shape."""

    def __init__(self, event_name: str, field_path: str, detail: str = "missing"):
        self.event_name = event_name
        self.field_path = field_path
        self.detail = detail
        super().__init__(f"{event_name} payload: {field_path} is {detail}")


class UnsupportedEventError(LookupError):
    """No routing rule is registered for a GitHub event name."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Unsupported GitHub event: {event_name}")
