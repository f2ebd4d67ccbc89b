"""Push the bucket distribution to a chat webhook (Slack/Mattermost style)."""

from __future__ import annotations

import logging

import httpx

from patchboard_core.errors import NotificationError
from patchboard_core.report import GridSummary, format_summary

logger = logging.getLogger(__name__)


def build_payload(grid_summary: GridSummary, title: str = "Gerrit Report") -> dict:
    """Incoming-webhook body: the fixed-width table inside a code block."""
    table = format_summary(grid_summary)
    return {"text": f"*{title}*: {grid_summary.total} open change(s)\n```\n{table}\n```"}


class WebhookNotifier:
    def __init__(self, url: str, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def send(self, grid_summary: GridSummary, title: str = "Gerrit Report") -> None:
        """Post the summary.

        Raises:
            NotificationError: transport failure or a non-2xx response.
        """
        payload = build_payload(grid_summary, title)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
        except httpx.RequestError as e:
            logger.error("Webhook post failed: %s", e)
            raise NotificationError(f"could not reach webhook: {e}") from e

        if not response.is_success:
            logger.warning("Webhook returned %d: %s", response.status_code, response.text[:200])
            raise NotificationError(f"webhook returned {response.status_code}")
        logger.info("Summary posted to webhook (%d change(s))", grid_summary.total)
