"""HTTP client for the workout backend (Apps Script web app).

Every call is a POST to the configured ``/exec`` URL with the operation name
and the shared secret in the query string and a JSON object body::

    POST {APP_URL}?fn=log_set&secret=...
    {"session_id": "...", "exercise": "Bench", "weight": 100, "reps": 5}

Replies are JSON objects carrying at least ``ok`` and, on failure, ``error``.
"""

import logging
from typing import Any, Optional

import httpx

from lift_logger.config import settings
from lift_logger.errors import BackendRejected, BackendTimeout, BackendUnavailable
from lift_logger.utils.deadline import DeadlineExceeded, with_deadline

logger = logging.getLogger(__name__)


class BackendClient:
    """Stateless request/response wrapper around the workout backend.

    The client never retries; callers decide what a failure means for them.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = settings.app_url if base_url is None else base_url
        self._secret = settings.app_secret if secret is None else secret
        self._timeout = settings.backend_timeout_seconds if timeout is None else timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        return bool(self._base_url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            )
            logger.info("BackendClient initialized (timeout=%ss)", self._timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("BackendClient closed")

    async def submit(
        self,
        operation: str,
        payload: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        """Submit ``operation`` with a JSON ``payload`` and return the reply.

        Args:
            operation: Backend function name, e.g. ``"session_start"``.
            payload: JSON-serializable request body. Defaults to ``{}``.
            timeout: Optional deadline in seconds for the whole round trip.

        Returns:
            The parsed reply object (``ok`` is guaranteed truthy).

        Raises:
            BackendTimeout: The deadline (or the HTTP timeout) expired.
            BackendUnavailable: Network error, HTTP error status, or a reply
                that is not a JSON object.
            BackendRejected: The reply did not carry a success flag.
        """
        if not self.configured:
            raise BackendUnavailable("APP_URL is not configured")

        try:
            data = await with_deadline(self._post(operation, payload or {}), timeout)
        except DeadlineExceeded as exc:
            logger.warning("Backend %s timed out after %ss", operation, timeout)
            raise BackendTimeout(f"{operation} timed out") from exc

        if not isinstance(data, dict):
            raise BackendUnavailable(f"{operation} returned a non-object reply")

        if not data.get("ok"):
            message = data.get("error") or "backend reported a failure"
            logger.info("Backend rejected %s: %s", operation, message)
            raise BackendRejected(str(message))

        return data

    async def _post(self, operation: str, payload: dict[str, Any]) -> Any:
        client = self._get_client()
        params = {"fn": operation, "secret": self._secret}

        try:
            response = await client.post(self._base_url, params=params, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Backend %s timed out: %s", operation, exc)
            raise BackendTimeout(f"{operation} timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Backend %s returned HTTP %d", operation, exc.response.status_code
            )
            raise BackendUnavailable(
                f"{operation} failed with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Backend %s request failed: %s", operation, exc)
            raise BackendUnavailable(f"{operation} request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise BackendUnavailable(f"{operation} returned invalid JSON") from exc
