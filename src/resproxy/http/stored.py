r"""Request snapshots saved to disk and replayed later.

A snapshot keeps everything needed to send the same request again:
method, path, query pairs, header pairs, accept, content type and body.
Execution flags and output preferences are chosen at replay time.
"""

from __future__ import annotations

__all__ = ["StoredRequest", "load_request", "save_request"]

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from resproxy.exceptions import StoredRequestError
from resproxy.http.options import DEFAULT_ACCEPT, RequestCommandOptions

if TYPE_CHECKING:
    from resproxy.output.preferences import OutputPreferences

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredRequest:
    """Persisted request snapshot."""

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    accept: str = DEFAULT_ACCEPT
    content_type: str | None = None
    body: str | None = None

    @classmethod
    def from_options(cls, options: RequestCommandOptions) -> StoredRequest:
        return cls(
            method=options.method,
            path=options.path,
            query=options.query,
            headers=options.headers,
            accept=options.accept,
            content_type=options.content_type,
            body=options.body,
        )

    def to_options(self, output: OutputPreferences | None = None, **flags: Any) -> RequestCommandOptions:
        """Rebuild the request options.

        Args:
            output: Output preferences of the replay.
            **flags: Execution flags such as ``confirmed=True`` or
                ``fail_on_non_success=False``.
        """
        if output is not None:
            flags["output"] = output
        return RequestCommandOptions(
            method=self.method,
            path=self.path,
            query=self.query,
            headers=self.headers,
            accept=self.accept,
            content_type=self.content_type,
            body=self.body,
            **flags,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "path": self.path,
            "query": [{"key": key, "value": value} for key, value in self.query],
            "headers": [{"key": key, "value": value} for key, value in self.headers],
            "accept": self.accept,
            "contentType": self.content_type,
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoredRequest:
        """Build a snapshot from its JSON representation.

        Raises:
            ValueError: If a field has the wrong type or the method or
                path is missing.
        """
        method = data.get("method")
        path = data.get("path")
        if not isinstance(method, str) or not method.strip():
            msg = "method is required"
            raise ValueError(msg)
        if not isinstance(path, str) or not path.strip():
            msg = "path is required"
            raise ValueError(msg)
        return cls(
            method=method.strip().upper(),
            path=path,
            query=_read_pairs(data.get("query"), "query"),
            headers=_read_pairs(data.get("headers"), "headers"),
            accept=data.get("accept") or DEFAULT_ACCEPT,
            content_type=data.get("contentType"),
            body=data.get("body"),
        )


def save_request(path: str | Path, request: StoredRequest) -> None:
    """Write ``request`` as pretty JSON, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(request.to_dict(), indent=2), encoding="utf-8")
    logger.debug(f"Saved request snapshot to {target}")


def load_request(path: str | Path) -> StoredRequest:
    """Load a snapshot written by ``save_request``.

    Raises:
        StoredRequestError: If the file cannot be read or does not
            contain a valid request.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig").replace("\r\n", "\n")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Failed to read replay file '{path}': {exc}"
        raise StoredRequestError(str(path), msg) from exc
    if not isinstance(data, dict):
        msg = f"Replay file '{path}' does not contain a valid request."
        raise StoredRequestError(str(path), msg)
    try:
        return StoredRequest.from_dict(data)
    except ValueError as exc:
        msg = f"Replay file '{path}' does not contain a valid request: {exc}."
        raise StoredRequestError(str(path), msg) from exc


def _read_pairs(raw: Any, name: str) -> tuple[tuple[str, str], ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = f"{name} must be a list of key/value pairs"
        raise ValueError(msg)
    pairs = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("key"), str):
            msg = f"{name} must be a list of key/value pairs"
            raise ValueError(msg)
        pairs.append((item["key"], str(item.get("value", ""))))
    return tuple(pairs)
