r"""Description of one HTTP call plus its execution policy flags."""

from __future__ import annotations

__all__ = ["DEFAULT_ACCEPT", "MUTATING_METHODS", "RequestCommandOptions"]

from dataclasses import dataclass, field, replace

from resproxy.output.preferences import OutputPreferences

DEFAULT_ACCEPT = "application/json"

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True)
class RequestCommandOptions:
    """Fully resolved request consumed by the request executor.

    Args:
        method: The HTTP method. Normalized to upper case.
        path: The request path, relative to the site URL.
        query: Query parameters as ordered ``(key, value)`` pairs.
        headers: Extra request headers as ``(key, value)`` pairs. They
            win over the computed headers on key collision.
        accept: Value of the ``Accept`` header.
        content_type: Explicit ``Content-Type`` of the body.
        body: Optional request body.
        out_path: Optional file receiving the response body.
        output: Output preferences.
        fail_on_non_success: Map non-2xx responses to a failing exit
            code.
        retry_non_idempotent: Allow retries for POST and PATCH.
        paginate: Aggregate every page of a GET list endpoint.
        confirmed: The user confirmed a mutating request.
    """

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    accept: str = DEFAULT_ACCEPT
    content_type: str | None = None
    body: str | None = None
    out_path: str | None = None
    output: OutputPreferences = field(default_factory=OutputPreferences)
    fail_on_non_success: bool = True
    retry_non_idempotent: bool = False
    paginate: bool = False
    confirmed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.strip().upper())
        object.__setattr__(self, "query", tuple((str(k), str(v)) for k, v in self.query))
        object.__setattr__(self, "headers", tuple((str(k), str(v)) for k, v in self.headers))

    @property
    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS

    def with_query(self, query: tuple[tuple[str, str], ...] | list[tuple[str, str]]) -> RequestCommandOptions:
        """Return a copy with the query pairs replaced."""
        return replace(self, query=tuple(query))
