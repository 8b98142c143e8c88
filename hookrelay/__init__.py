"""hookrelay - GitHub webhook event router with Slack and pipeline hooks."""

__version__ = "0.1.0"
