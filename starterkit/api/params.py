"""Route parameter access that works for immediate and deferred params.

Some callers hand over path parameters as a plain mapping, others as an
awaitable that resolves to one.  :class:`ParamSource` hides the difference:
``await source.get("slug")`` works either way.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Mapping, Union

ParamsLike = Union[Mapping[str, Any], Awaitable[Mapping[str, Any]], None]


class ParamSource:
    def __init__(self, params: ParamsLike) -> None:
        self._params = params

    async def _resolve(self) -> Mapping[str, Any] | None:
        if inspect.isawaitable(self._params):
            # An awaitable can only be consumed once; keep the resolved value.
            self._params = await self._params
        return self._params  # type: ignore[return-value]

    async def get(self, name: str) -> Any | None:
        """Return the parameter *name*, or ``None`` if it is missing."""
        params = await self._resolve()
        if not params:
            return None
        return params.get(name)


async def resolve_slug(source: ParamSource) -> str | None:
    slug = await source.get("slug")
    return str(slug) if slug else None
