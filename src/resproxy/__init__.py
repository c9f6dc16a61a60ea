r"""resproxy - Execution core of a command-line REST API proxy.

Given a fully resolved HTTP request description and a target
configuration, resproxy sends the request with policy-driven retries,
optionally aggregates every page of a GET list endpoint, maps the
outcome into a normalized success/error envelope and renders that
envelope through a configurable output pipeline.

Key Features:
    - Retries for 429 and 5xx responses and for network failures, with
      exponential backoff, jitter and Retry-After support
    - Confirmation gating for mutating methods
    - ``startAt`` pagination aggregation
    - Fixed error taxonomy and process exit codes
    - Filter, sort, limit and select over the response data
    - JSON, JSON Lines and text output

Example:
    ```pycon
    >>> from resproxy import Config, RequestCommandOptions, RequestExecutor
    >>> config = Config.from_env()  # doctest: +SKIP
    >>> options = RequestCommandOptions("GET", "/rest/api/3/myself")
    >>> exit_code = RequestExecutor().execute(config, options)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "Config",
    "Envelope",
    "ExitCode",
    "OutputPreferences",
    "OutputRenderer",
    "RequestCommandOptions",
    "RequestExecutor",
    "RetryPolicy",
    "StoredRequest",
    "VerboseLogger",
    "__version__",
]

from resproxy.core.config import Config
from resproxy.envelope import Envelope
from resproxy.errors import ExitCode
from resproxy.http.executor import RequestExecutor
from resproxy.http.options import RequestCommandOptions
from resproxy.http.stored import StoredRequest
from resproxy.output.preferences import OutputPreferences
from resproxy.output.renderer import OutputRenderer
from resproxy.retry.policy import RetryPolicy
from resproxy.utils.structured_logging import VerboseLogger
from resproxy.version import __version__
