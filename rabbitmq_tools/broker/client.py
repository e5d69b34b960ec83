"""HTTP client for the RabbitMQ management API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import aiohttp
import structlog
from yarl import URL

from rabbitmq_tools.errors import TransportError

logger = structlog.get_logger()


def encode_segment(value: str) -> str:
    """Percent-encode a single path segment, including any '/'."""
    return quote(value, safe="")


def build_path(*segments: str) -> str:
    """Join raw segments into an absolute path, encoding each one separately."""
    return "/" + "/".join(encode_segment(segment) for segment in segments)


@dataclass
class BrokerConfig:
    """Connection settings for the management API."""

    management_url: str = "http://localhost:15672/api"
    username: str = "guest"
    password: str = "guest"
    timeout_seconds: float | None = 30.0


class BrokerClient:
    """Thin async wrapper around the management API.

    Every call opens its own session, so concurrent calls share nothing.
    Failures are raised as TransportError and never retried here.
    """

    def __init__(self, config: BrokerConfig | None = None) -> None:
        self.config = config or BrokerConfig()
        self._auth = aiohttp.BasicAuth(self.config.username, self.config.password)
        self._log = logger.bind(
            component="broker_client",
            base_url=self.config.management_url,
        )

    def url_for(self, path: str) -> URL:
        """Build the full URL for an already-encoded path."""
        base = self.config.management_url.rstrip("/")
        return URL(f"{base}{path}", encoded=True)

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns None when the broker answers with an empty body (e.g. 204).

        Raises:
            TransportError: on connection failure or a non-2xx status.
        """
        url = self.url_for(path)

        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        self._log.debug("Sending request", method=method, path=path)

        try:
            async with aiohttp.ClientSession(auth=self._auth, timeout=timeout) as session:
                async with session.request(method, url, json=body) as response:
                    raw = await response.read()

                    if response.status < 200 or response.status >= 300:
                        self._log.warning(
                            "Request rejected",
                            method=method,
                            path=path,
                            status=response.status,
                        )
                        raise TransportError(
                            method,
                            path,
                            status=response.status,
                            body=raw.decode("utf-8", errors="replace"),
                            reason=response.reason,
                        )

        except aiohttp.ClientError as e:
            self._log.error("Request failed", method=method, path=path, error=str(e))
            raise TransportError(method, path, reason=str(e)) from e

        except TimeoutError as e:
            self._log.error("Request timed out", method=method, path=path)
            raise TransportError(method, path, reason="request timed out") from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(
                method,
                path,
                status=response.status,
                body=raw.decode("utf-8", errors="replace"),
                reason="response is not valid UTF-8",
            ) from e

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError(
                method,
                path,
                status=response.status,
                body=text,
                reason="response is not valid JSON",
            ) from e
