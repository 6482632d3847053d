"""Outbound GraphQL request helper.

One call = one POST to a GraphQL endpoint, bounded by a timeout.  The result
is always a :class:`GraphQLResult`; transport failures, timeouts, non-JSON
bodies and HTTP error statuses are all folded into its ``errors`` / ``status``
fields instead of being raised.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

import httpx

DEFAULT_TIMEOUT_MS = 8000

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Request / response types
# ---------------------------------------------------------------------------

@dataclass
class GraphQLRequest:
    endpoint: str
    query: str
    variables: Mapping[str, Any] | None = None
    token: str | None = None
    headers: Mapping[str, str] | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    cache: str = "no-store"


@dataclass
class GraphQLError:
    message: str
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> GraphQLError:
        if not isinstance(raw, dict):
            return cls(message=str(raw))
        return cls(
            message=str(raw.get("message", "")),
            path=raw.get("path"),
            extensions=raw.get("extensions"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message": self.message}
        if self.path is not None:
            out["path"] = self.path
        if self.extensions is not None:
            out["extensions"] = self.extensions
        return out


@dataclass
class GraphQLResult(Generic[T]):
    status: int
    data: T | None = None
    errors: list[GraphQLError] | None = None

    @property
    def error_messages(self) -> list[str] | None:
        """Messages of all errors, or ``None`` when there are none."""
        if self.errors is None:
            return None
        return [err.message for err in self.errors]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_headers(request: GraphQLRequest) -> dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "Cache-Control": request.cache,
    }
    if request.headers:
        headers.update(request.headers)
    if request.token:
        headers["Authorization"] = f"Bearer {request.token}"
    return headers


def _build_body(request: GraphQLRequest) -> dict[str, Any]:
    body: dict[str, Any] = {"query": request.query}
    if request.variables is not None:
        body["variables"] = dict(request.variables)
    return body


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "").lower()


async def _send(request: GraphQLRequest) -> tuple[int, Any]:
    """POST *request* and return ``(status, parsed_json_or_None)``."""
    async with httpx.AsyncClient(timeout=request.timeout_ms / 1000) as client:
        response = await client.post(
            request.endpoint,
            json=_build_body(request),
            headers=_build_headers(request),
        )
        payload = response.json() if _is_json(response) else None
        return response.status_code, payload


def _timeout_result(timeout_ms: int) -> GraphQLResult[Any]:
    return GraphQLResult(
        status=504,
        errors=[GraphQLError(message=f"GraphQL request timed out after {timeout_ms}ms")],
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def request_graphql(request: GraphQLRequest) -> GraphQLResult[Any]:
    """Send *request* and normalise whatever comes back.

    Returns:
        A :class:`GraphQLResult`.  ``status`` is the upstream HTTP status, or
        504 when the timer fired / httpx timed out, or 500 for any other
        failure.  ``errors`` prefers the GraphQL ``errors`` array; a non-2xx
        response without one gets a single synthesised error.

    Raises:
        asyncio.CancelledError: Only when the *caller's* task is cancelled;
            cancellations triggered by the timeout timer are reported as 504.
    """
    loop = asyncio.get_running_loop()
    task = asyncio.ensure_future(_send(request))
    timed_out = False

    def _on_timeout() -> None:
        nonlocal timed_out
        timed_out = True
        task.cancel()

    timer = loop.call_later(request.timeout_ms / 1000, _on_timeout)

    try:
        status, payload = await task

        data = None
        errors = None
        if isinstance(payload, dict):
            data = payload.get("data")
            raw_errors = payload.get("errors")
            if isinstance(raw_errors, list):
                errors = [GraphQLError.from_dict(e) for e in raw_errors]

        if errors is None and not 200 <= status < 300:
            errors = [GraphQLError(message=f"GraphQL request failed with status {status}")]

        return GraphQLResult(status=status, data=data, errors=errors)
    except asyncio.CancelledError:
        if not timed_out:
            raise
        print(f"[GraphQL] {request.endpoint} timed out after {request.timeout_ms}ms")
        return _timeout_result(request.timeout_ms)
    except httpx.TimeoutException as exc:
        print(f"[GraphQL] {request.endpoint} timed out: {exc!r:.120}")
        return _timeout_result(request.timeout_ms)
    except Exception as exc:
        message = str(exc) or "Unknown GraphQL request error"
        print(f"[GraphQL] {request.endpoint} request failed: {message}")
        return GraphQLResult(status=500, errors=[GraphQLError(message=message)])
    finally:
        timer.cancel()
