"""Read-only Gerrit REST client.

Gerrit prefixes every JSON response with a ``)]}'`` line to defeat XSSI;
it is stripped before parsing. Transport errors and 5xx responses are
retried with exponential backoff, anything else fails immediately.
"""

from __future__ import annotations

import asyncio
import json
import logging
from urllib.parse import quote

import httpx

from patchboard_core.errors import GerritFetchError

logger = logging.getLogger(__name__)

XSSI_PREFIX = ")]}'"

DEFAULT_QUERY_PREFIX = "/changes/?q="
DEFAULT_QUERY_SUFFIX = "&o=DETAILED_LABELS&o=DETAILED_ACCOUNTS"

_MAX_RETRIES = 3
_TIMEOUT_SECONDS = 30.0


def strip_xssi_prefix(raw: str) -> str:
    """Drop Gerrit's magic first line, if present, and rejoin the rest."""
    lines = raw.splitlines()
    if lines and lines[0].strip() == XSSI_PREFIX:
        return "".join(lines[1:])
    return raw


def parse_gerrit_json(raw: str) -> list[dict]:
    """Parse a ``/changes/`` response body into a list of change dicts."""
    try:
        data = json.loads(strip_xssi_prefix(raw))
    except json.JSONDecodeError as e:
        raise GerritFetchError(f"Gerrit returned invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise GerritFetchError(f"expected a JSON array of changes, got {type(data).__name__}")
    return data


class GerritClient:
    MAX_RETRIES: int = _MAX_RETRIES

    def __init__(
        self,
        base_url: str,
        query_prefix: str = DEFAULT_QUERY_PREFIX,
        query_suffix: str = DEFAULT_QUERY_SUFFIX,
        timeout: float = _TIMEOUT_SECONDS,
        retries: int = _MAX_RETRIES,
        backoff: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.query_prefix = query_prefix
        self.query_suffix = query_suffix
        self.timeout = timeout
        self.MAX_RETRIES = max(1, retries)
        self.backoff = backoff
        self._transport = transport

    @classmethod
    def from_config(cls, config: dict) -> GerritClient:
        from patchboard_core.config import require_gerrit_url

        return cls(
            base_url=require_gerrit_url(config),
            query_prefix=config.get("query_prefix", DEFAULT_QUERY_PREFIX),
            query_suffix=config.get("query_suffix", DEFAULT_QUERY_SUFFIX),
            timeout=config.get("request_timeout", _TIMEOUT_SECONDS),
            retries=config.get("request_retries", _MAX_RETRIES),
        )

    def query_url(self, query: str) -> str:
        return self.base_url + self.query_prefix + quote(query, safe=":+/") + self.query_suffix

    async def fetch_changes(self, query: str = "is:open") -> list[dict]:
        """Return every change matching ``query`` as parsed ChangeInfo dicts.

        Raises:
            GerritFetchError: all attempts failed or the body was not a JSON array.
        """
        url = self.query_url(query)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            text = await self._get_with_retry(client, url)
        changes = parse_gerrit_json(text)
        logger.info("Fetched %d change(s) for query %r", len(changes), query)
        return changes

    async def _get_with_retry(self, client: httpx.AsyncClient, url: str) -> str:
        for attempt in range(self.MAX_RETRIES):
            try:
                response = await client.get(url)
                if response.status_code >= 500:
                    raise httpx.HTTPStatusError(
                        f"server error {response.status_code}", request=response.request, response=response
                    )
                if response.status_code != 200:
                    raise GerritFetchError(f"GET {url} returned {response.status_code}: {response.text[:200]}")
                return response.text
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error("GET %s failed after %d attempts: %s", url, self.MAX_RETRIES, e)
                    raise GerritFetchError(f"GET {url} failed after {self.MAX_RETRIES} attempts: {e}") from e
                delay = self.backoff * 2**attempt
                logger.warning(
                    "GET %s failed (attempt %d/%d): %s. Retrying in %.0fs...",
                    url,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                await asyncio.sleep(delay)
        raise GerritFetchError(f"GET {url} was not attempted")
