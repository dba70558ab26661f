"""Results webhook client with exponential backoff retry logic"""

import httpx
import asyncio
from typing import Dict, Any
from score_projector.config import settings
from score_projector.domain.exceptions import NotificationError
from score_projector.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter


class ResultsNotifier:
    """Client for sending saved projections to the results email webhook"""

    def __init__(
        self,
        webhook_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.webhook_url = webhook_url or settings.notifier_webhook_url
        self.timeout = settings.http_timeout_seconds
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.transport = transport

    async def send_results_event(self, payload: Dict[str, Any]) -> None:
        """
        Send SIMULATION_SAVED event to the webhook with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^attempt)
        - Retries on 5xx errors and network failures; 4xx fails immediately

        Raises:
            NotificationError: After the final failed attempt
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return  # Success

                except httpx.HTTPStatusError as e:
                    webhook_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise NotificationError(f"Results webhook rejected event: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise NotificationError(f"Results webhook error: {e.response.status_code}") from e

                except httpx.RequestError as e:
                    webhook_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise NotificationError(f"Results webhook unreachable: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)
