r"""Request model, URL construction, response handling and the request
executor."""

from __future__ import annotations

__all__ = [
    "RequestCommandOptions",
    "RequestExecutor",
    "StoredRequest",
    "build_url",
    "load_request",
    "save_request",
]

from resproxy.http.executor import RequestExecutor
from resproxy.http.options import RequestCommandOptions
from resproxy.http.stored import StoredRequest, load_request, save_request
from resproxy.http.url import build_url
