"""Slack incoming-webhook notifier."""

import logging

import httpx

logger = logging.getLogger(__name__)


class SlackNotifier:
    """Posts messages to a Slack incoming webhook.

    Non-2xx responses raise ``httpx.HTTPStatusError``; transport errors
    and timeouts raise their own ``httpx`` exceptions. Nothing is retried.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        if not webhook_url or not webhook_url.strip():
            raise ValueError("❌ SLACK_WEBHOOK_URL is required outside dev mode")
        self.webhook_url = webhook_url.strip()
        self.timeout = timeout

    async def notify(self, message: str) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(self.webhook_url, json={"text": message})
            resp.raise_for_status()
        logger.info("📣 Slack notification sent")


class LoggingNotifier:
    """Dev-mode notifier that only logs what would have been sent."""

    async def notify(self, message: str) -> None:
        logger.info(f"[DEV MODE] Would notify Slack: {message}")
