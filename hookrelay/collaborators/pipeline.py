"""Pipeline triggers: RabbitMQ queue or HTTP CI/CD endpoint."""

import asyncio
import json
import logging
from typing import Dict, Optional

import httpx
import pika

from .base import PipelineRequest

logger = logging.getLogger(__name__)


class RabbitMQPipelineTrigger:
    """Publishes pipeline requests to a durable RabbitMQ queue.

    A connection is opened per request and closed afterwards; pika's
    BlockingConnection is not thread-safe, and requests arrive from
    concurrent webhook tasks.
    """

    def __init__(self, rabbitmq_url: str, queue_name: str):
        self.rabbitmq_url = rabbitmq_url
        self.queue_name = queue_name

    def _publish(self, body: str) -> None:
        connection = pika.BlockingConnection(pika.URLParameters(self.rabbitmq_url))
        try:
            channel = connection.channel()
            channel.queue_declare(queue=self.queue_name, durable=True)
            channel.basic_publish(
                exchange="",
                routing_key=self.queue_name,
                body=body,
                properties=pika.BasicProperties(
                    content_type="application/json",
                    delivery_mode=2,  # Persistent messages
                ),
            )
        finally:
            if not connection.is_closed:
                connection.close()

    async def trigger(self, request: PipelineRequest) -> None:
        await asyncio.to_thread(self._publish, json.dumps(request.to_dict()))
        logger.info(
            f"📤 Queued pipeline run for {request.repository}@{request.branch} "
            f"on '{self.queue_name}'"
        )


class HttpPipelineTrigger:
    """POSTs pipeline requests to a CI/CD endpoint."""

    def __init__(self, url: str, token: Optional[str] = None, timeout: float = 10.0):
        if not url or not url.strip():
            raise ValueError("❌ CICD_URL is required for the http pipeline backend")
        self.url = url.strip()
        self.token = token.strip() if token else None
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def trigger(self, request: PipelineRequest) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                self.url, json=request.to_dict(), headers=self._headers()
            )
            resp.raise_for_status()
        logger.info(
            f"🚀 Triggered CI/CD for {request.repository}@{request.branch} "
            f"({resp.status_code})"
        )


class LoggingPipelineTrigger:
    """Dev-mode trigger that only logs the request."""

    async def trigger(self, request: PipelineRequest) -> None:
        logger.info(
            f"[DEV MODE] Would trigger pipeline: {json.dumps(request.to_dict())}"
        )
