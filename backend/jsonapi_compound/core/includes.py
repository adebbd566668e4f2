"""Include Selector — answers which relationship names were requested at a dotted prefix.

Invariants:
    - parse(request, prefix) is a pure function of the raw `include` value and the prefix
    - Requesting "a.b" implies "a" at the root (first path segment is always selected)
    - Repeated or bracketed include parameters are rejected with InvalidIncludeError
    - Parsing is cached process-wide by (raw value, prefix); flush() clears the cache

Design Decisions:
    - Cache keyed by the raw query value rather than the request object: starlette
      requests are unhashable Mappings, and equal raw values always parse equally
    - Duck-typed request (anything exposing query_params.getlist): core never imports
      starlette, so tests and non-HTTP callers can pass lightweight stand-ins
"""

import logging
from functools import lru_cache
from typing import Protocol

from jsonapi_compound.core.domain_types import IncludePath, PATH_SEPARATOR
from jsonapi_compound.core.errors import InvalidIncludeError

logger = logging.getLogger(__name__)


class QueryParamsLike(Protocol):
    def getlist(self, key: str) -> list[str]: ...
    def keys(self): ...


class IncludeRequest(Protocol):
    """Structural contract for the request passed through the resolver."""
    query_params: QueryParamsLike


@lru_cache(maxsize=512)
def _split_paths(raw: str) -> tuple[IncludePath, ...]:
    """Normalize "a, b.c,,a" into ("a", "b.c") preserving first-seen order."""
    paths: list[IncludePath] = []
    for segment in raw.split(","):
        path = segment.strip()
        if path and path not in paths:
            paths.append(IncludePath(path))
    return tuple(paths)


@lru_cache(maxsize=2048)
def _names_at_prefix(raw: str, prefix: str) -> frozenset[str]:
    names = set()
    for path in _split_paths(raw):
        if not path.startswith(prefix):
            continue
        remainder = path[len(prefix):]
        name = remainder.split(PATH_SEPARATOR, 1)[0]
        if name:
            names.add(name)
    return frozenset(names)


class IncludeSelector:
    """Reads the include query parameter and filters it by traversal prefix."""

    def __init__(self, query_param: str = "include"):
        self.query_param = query_param

    def parse(self, request: IncludeRequest, prefix: str = "") -> frozenset[str]:
        """Relationship names requested at `prefix` ("" for the root)."""
        raw = self._raw_include(request)
        if raw is None:
            return frozenset()
        return _names_at_prefix(raw, prefix)

    def requested_paths(self, request: IncludeRequest) -> tuple[IncludePath, ...]:
        """Full normalized dotted paths, in the order the client listed them."""
        raw = self._raw_include(request)
        if raw is None:
            return ()
        return _split_paths(raw)

    def flush(self) -> None:
        """Drop every cached parse result."""
        _split_paths.cache_clear()
        _names_at_prefix.cache_clear()

    def _raw_include(self, request: IncludeRequest) -> str | None:
        params = request.query_params
        bracketed = [
            key for key in params.keys() if key.startswith(f"{self.query_param}[")
        ]
        if bracketed:
            logger.warning(
                f"Rejected array-style include parameter: {bracketed[0]}",
                extra={"parameter": self.query_param},
            )
            raise InvalidIncludeError(
                f"The {self.query_param} parameter must be a comma-separated string",
                self.query_param,
            )
        values = params.getlist(self.query_param)
        if len(values) > 1:
            raise InvalidIncludeError(
                f"The {self.query_param} parameter must be given at most once",
                self.query_param,
            )
        return values[0] if values else None


includes = IncludeSelector()
