"""JSON HTTP Client: one GET, one parsed body, or one NetworkFailure.

Invariants:
    - Exactly one outbound request per call; no retry (retry policy belongs to callers)
    - Timeouts mapped to NetworkTimeout, other transport errors and non-2xx to NetworkFailure
    - A body that is not JSON is a NetworkFailure; MalformedResponse is the parser's job
    - fetch_json_callback invokes its callback exactly once

Design Decisions:
    - Wrapper over raw httpx.AsyncClient: isolates error mapping from the adapters
    - The shared AsyncClient is owned by the FastAPI lifespan; this class never closes it
    - Callback-style entry point keeps a strong reference to its task until completion
      (the event loop only holds weak references to tasks)
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from asyncflow.core.errors import ErrorContext, NetworkFailure, NetworkTimeout

logger = logging.getLogger(__name__)

JsonCallback = Callable[[BaseException | None, Any], None]


def build_async_client(timeout_seconds: float) -> httpx.AsyncClient:
    """Create the process-wide connection pool used by JsonHttpClient."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={"Accept": "application/json"},
    )


class JsonHttpClient:
    """GETs JSON documents, mapping every failure onto the pipeline error taxonomy."""

    def __init__(
        self, client: httpx.AsyncClient, timeout_seconds: float | None = None,
    ):
        self._client = client
        self._timeout = (
            httpx.Timeout(timeout_seconds) if timeout_seconds is not None
            else httpx.USE_CLIENT_DEFAULT
        )
        self._pending: set[asyncio.Task] = set()

    async def fetch_json(self, url: str, *, stage: str | None = None) -> Any:
        """GET url and return the decoded JSON body."""
        context = ErrorContext(stage=stage, url=url)
        try:
            response = await self._client.get(url, timeout=self._timeout)
        except httpx.TimeoutException as e:
            logger.warning(
                f"GET {url} timed out", extra={"stage": stage, "url": url},
            )
            raise NetworkTimeout(f"GET {url} timed out", context) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                f"GET {url} failed: {e}", extra={"stage": stage, "url": url},
            )
            raise NetworkFailure(f"GET {url} failed: {e}", context) from e

        if not response.is_success:
            context.status_code = response.status_code
            logger.warning(
                f"GET {url} returned {response.status_code}",
                extra={
                    "stage": stage, "url": url,
                    "status_code": response.status_code,
                },
            )
            raise NetworkFailure(
                f"GET {url} returned HTTP {response.status_code}", context,
            )

        try:
            return response.json()
        except ValueError as e:
            context.status_code = response.status_code
            raise NetworkFailure(
                f"GET {url} returned a body that is not JSON", context,
            ) from e

    def fetch_json_callback(
        self, url: str, callback: JsonCallback, *, stage: str | None = None,
    ) -> asyncio.Task:
        """Start fetch_json on the running loop; call callback(error, body) when done.

        Must be called from inside a running event loop.
        """
        task = asyncio.ensure_future(self.fetch_json(url, stage=stage))
        self._pending.add(task)

        def _deliver(done: asyncio.Task) -> None:
            self._pending.discard(done)
            if done.cancelled():
                callback(
                    NetworkFailure(
                        f"GET {url} was cancelled",
                        ErrorContext(stage=stage, url=url),
                    ),
                    None,
                )
                return
            error = done.exception()
            if error is not None:
                callback(error, None)
            else:
                callback(None, done.result())

        task.add_done_callback(_deliver)
        return task
