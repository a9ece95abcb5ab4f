"""Relay backend: unauthenticated JSON over HTTP to the hosted gyst server."""

import contextlib
import logging
import time
from typing import Callable, Optional

import httpx

from gyst import __version__
from gyst.llm.base import BaseProvider, RetryPolicy, parse_retry_after
from gyst.llm.exceptions import (
    AuthError,
    BadRequestError,
    MalformedResponseError,
    NetworkError,
    RateLimitedError,
    ServerError,
)
from gyst.llm.prompts import Prompt
from gyst.models import TaskKind

LOG = logging.getLogger(__name__)

HEALTH_ENDPOINT = "/api/health"


def _error_detail(response: httpx.Response) -> str:
    text = response.text.strip()
    return text[:200] if text else response.reason_phrase


def raise_for_status(response: httpx.Response) -> None:
    """Translate a non-2xx relay response into a classified LLMError."""
    status = response.status_code
    if status < 400:
        return

    detail = _error_detail(response)
    if status in (401, 403):
        raise AuthError(f"Relay rejected the request ({status}): {detail}")
    if status == 429:
        raise RateLimitedError(
            f"Relay rate limit reached: {detail}",
            retry_after=parse_retry_after(response.headers.get("retry-after")),
        )
    if status >= 500:
        raise ServerError(f"Relay server error ({status}): {detail}", status_code=status)
    raise BadRequestError(f"Relay rejected the request ({status}): {detail}", status_code=status)


class RelayProvider(BaseProvider):
    """Talks to the relay's /api/commit, /api/commit/suggestions and /api/command."""

    name = "relay"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the relay provider.

        Args:
            base_url: Relay server base URL.
            timeout: Per-request timeout in seconds.
            client: Optional preconfigured httpx client (not closed by us).
            retry_policy: Backoff settings; defaults to 3 attempts.
            sleep: Sleep function used between attempts.
        """
        super().__init__(retry_policy=retry_policy, sleep=sleep)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _open_client(self):
        if self._client is not None:
            return contextlib.nullcontext(self._client)
        return httpx.Client(
            timeout=self.timeout,
            headers={"User-Agent": f"gyst/{__version__}"},
        )

    def _call(self, method: str, endpoint: str, body: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{endpoint}"
        try:
            with self._open_client() as client:
                response = client.request(method, url, json=body)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to relay timed out after {self.timeout}s: {e}")
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach relay at {self.base_url}: {e}")

        raise_for_status(response)

        try:
            data = response.json()
        except ValueError:
            raise MalformedResponseError(f"Relay returned invalid JSON: {_error_detail(response)}")
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Relay returned unexpected JSON: {data!r}")
        return data

    def _request(self, prompt: Prompt, count: int) -> list[str]:
        data = self._call("POST", prompt.relay_endpoint, prompt.relay_body)

        if prompt.task.kind == TaskKind.SUGGESTIONS:
            suggestions = data.get("suggestions")
            if not isinstance(suggestions, list):
                raise MalformedResponseError("Relay response is missing 'suggestions'")
            return [s for s in suggestions if isinstance(s, str)][:count]

        key = "suggestion" if prompt.task.kind == TaskKind.COMMAND_EXPLAIN else "message"
        text = data.get(key)
        if not isinstance(text, str):
            raise MalformedResponseError(f"Relay response is missing '{key}'")
        return [text]

    def health_check(self) -> dict:
        """Query GET /api/health.

        Returns:
            The relay's {"status": ..., "version": ...} payload.
        """
        return self._call("GET", HEALTH_ENDPOINT)
