"""JSON-over-HTTP helper shared by every provider client.

No retries happen here; retry and failover policy belongs to callers.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import re
import socket
import threading
import time
from typing import Any

import requests

from ..logger import TRACE, get_logger

logger = get_logger(__name__)

BODY_SNIPPET_CHARS = 200
BODY_CHUNK_BYTES = 64 * 1024
RETRIABLE_STATUSES = frozenset({429, 500, 502, 503, 504})

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

_API_KEY_PATTERN = re.compile(r"(api-key=)[^&\s\"']+", re.IGNORECASE)


def redact(text: str) -> str:
    """Strip API keys from URLs and error messages before they are logged."""
    return _API_KEY_PATTERN.sub(r"\1***", text)


class UpstreamError(Exception):
    """Raised when a provider answers with a non-2xx status or an unusable body."""

    def __init__(
        self,
        url: str,
        status: int | None = None,
        body_snippet: str = "",
    ):
        self.url = redact(url)
        self.status = status
        self.body_snippet = redact(body_snippet[:BODY_SNIPPET_CHARS])
        label = f"HTTP {status}" if status is not None else "request failed"
        message = f"{label} from {self.url}"
        if self.body_snippet:
            message = f"{message}: {self.body_snippet}"
        super().__init__(message)

    @property
    def retriable(self) -> bool:
        return self.status in RETRIABLE_STATUSES


class UpstreamTimeout(UpstreamError, TimeoutError):
    """Raised when a provider does not answer within the call's timeout."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, None, f"timed out after {timeout:.1f}s")

    @property
    def retriable(self) -> bool:
        return False


def _shutdown_socket(response: requests.Response) -> None:
    """Shut down the socket under a streamed response, waking a blocked read."""
    raw = response.raw
    connection = getattr(raw, "connection", None) or getattr(raw, "_connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    # already closed by the worker
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


class InFlightCall:
    """Handle on one blocking request, shared by the worker thread and the loop.

    The loop calls ``abort()`` on timeout or cancellation; the worker stops
    at its next checkpoint and any read blocked on the socket returns early.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._response: requests.Response | None = None
        self._aborted = False
        self._finished = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def attach(self, response: requests.Response) -> bool:
        """Register the streamed response; False if the call was already aborted."""
        with self._lock:
            if self._aborted:
                return False
            self._response = response
            return True

    def finish(self) -> None:
        with self._lock:
            self._finished = True
            self._response = None

    def abort(self) -> None:
        with self._lock:
            self._aborted = True
            response = None if self._finished else self._response
        if response is not None:
            _shutdown_socket(response)


class HttpClient:
    """Async facade over a shared ``requests.Session``.

    Each call runs in a worker thread and streams its body under one total
    deadline. When ``asyncio.timeout`` fires or the caller is cancelled, the
    socket is shut down from the loop side, so no worker outlives its call
    reading a slow upstream. A semaphore bounds how many calls one request
    keeps in flight.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        max_concurrent_requests: int = 5,
    ):
        self._session = session
        self._limiter = asyncio.Semaphore(max_concurrent_requests)

    def _read_body(
        self,
        response: requests.Response,
        url: str,
        timeout: float,
        deadline: float,
        call: InFlightCall,
    ) -> bytes:
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_BYTES):
                if call.aborted or time.monotonic() > deadline:
                    raise UpstreamTimeout(url, timeout)
                chunks.append(chunk)
        except requests.RequestException as e:
            if call.aborted:
                raise UpstreamTimeout(url, timeout) from e
            raise UpstreamError(url, response.status_code, str(e)) from e
        if call.aborted:
            raise UpstreamTimeout(url, timeout)
        return b"".join(chunks)

    def _send(
        self,
        url: str,
        method: str,
        body: Any,
        headers: dict[str, str],
        params: dict[str, Any] | None,
        timeout: float,
        call: InFlightCall,
    ) -> Any:
        deadline = time.monotonic() + timeout
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                headers=headers,
                params=params,
                timeout=timeout,
                stream=True,
            )
        except requests.Timeout as e:
            raise UpstreamTimeout(url, timeout) from e
        except requests.RequestException as e:
            raise UpstreamError(url, None, str(e)) from e

        if not call.attach(response):
            response.close()
            raise UpstreamTimeout(url, timeout)

        try:
            with response:
                content = self._read_body(response, url, timeout, deadline, call)
        finally:
            call.finish()

        if not response.ok:
            raise UpstreamError(
                url, response.status_code, content.decode("utf-8", errors="replace")
            )
        try:
            return json.loads(content)
        except ValueError as e:
            raise UpstreamError(
                url, response.status_code, f"invalid JSON body: {e}"
            ) from e

    async def fetch_json(
        self,
        url: str,
        method: str = "GET",
        *,
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float = 15.0,
    ) -> Any:
        """Send a request and return the parsed JSON body.

        Args:
            url: Target URL
            method: HTTP method
            body: JSON-serialisable request body
            headers: Extra headers merged over the JSON defaults
            params: Query-string parameters
            timeout: Total seconds allowed for the call, body included

        Raises:
            UpstreamError: On non-2xx status, transport failure or invalid JSON
            UpstreamTimeout: When ``timeout`` elapses
        """
        merged = {**DEFAULT_HEADERS, **(headers or {})}
        call = InFlightCall()
        async with self._limiter:
            logger.log(TRACE, "%s %s", method, redact(url))
            try:
                async with asyncio.timeout(timeout):
                    return await asyncio.to_thread(
                        self._send, url, method, body, merged, params, timeout, call
                    )
            except TimeoutError as e:
                call.abort()
                if isinstance(e, UpstreamTimeout):
                    raise
                raise UpstreamTimeout(url, timeout) from e
            except asyncio.CancelledError:
                call.abort()
                raise
