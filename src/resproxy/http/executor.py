r"""Request execution with retries, pagination and envelope rendering.

``RequestExecutor.execute`` is the single entry point used by every
request-producing command. It enforces the preconditions, sends the
request with the retry policy, optionally aggregates every page of a
list endpoint, converts the outcome into an envelope, prints it and
returns the process exit code.
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "AttemptResult", "RequestExecutor"]

import contextlib
import logging
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import httpx

from resproxy.core.auth import create_auth_header
from resproxy.envelope import Envelope, ErrorInfo, Meta
from resproxy.errors import ErrorCode, ExitCode, from_exception, from_http_status
from resproxy.http.response import (
    build_combined_output,
    build_http_error,
    extract_page,
    get_request_id,
    is_success,
    parse_payload,
    save_body_to_file,
)
from resproxy.http.url import build_url
from resproxy.output.renderer import OutputRenderer
from resproxy.retry.policy import RetryPolicy
from resproxy.utils.json_text import dumps_json, loads_json
from resproxy.utils.redact import redact_headers
from resproxy.utils.structured_logging import VerboseLogger
from resproxy.version import __version__

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import TextIO

    from resproxy.core.config import Config
    from resproxy.http.options import RequestCommandOptions

logger: logging.Logger = logging.getLogger(__name__)

USER_AGENT = f"resproxy/{__version__}"

EXCEPTION_HINT = "Inspect the verbose output and verify network connectivity."


class AttemptOutcome(Enum):
    """Result class of one send attempt.

    Attributes:
        SUCCESS: A response that must not be retried, whatever its
            status code.
        RETRYABLE_FAILURE: A 429/5xx response or a transport failure.
        FATAL_FAILURE: Any other exception.
    """

    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    FATAL_FAILURE = "fatal_failure"


@dataclass
class AttemptResult:
    """What a single send attempt produced.

    Attributes:
        outcome: The classification driving the retry loop.
        response: The received response, or ``None`` if the attempt
            raised.
        error: The raised exception, or ``None`` if a response was
            received.
    """

    outcome: AttemptOutcome
    response: httpx.Response | None = None
    error: Exception | None = None


class RequestExecutor:
    """Send one logical request and render its outcome.

    Args:
        client: The HTTP client. When ``None`` a pooled ``httpx.Client``
            is opened for each ``execute`` call and closed afterwards.
        retry_policy: The retry policy. Defaults to ``RetryPolicy()``.
        renderer: The envelope renderer. Defaults to ``OutputRenderer()``.
        auth_header_provider: Callable computing ``(scheme, value)`` of
            the ``Authorization`` header from the configuration.
        stdout: The stream receiving the rendered envelope. Defaults to
            ``sys.stdout`` at the time of the call.

    Example:
        ```pycon
        >>> import httpx
        >>> from resproxy.core.config import Config
        >>> from resproxy.http.executor import RequestExecutor
        >>> from resproxy.http.options import RequestCommandOptions
        >>> from resproxy.output.preferences import OutputPreferences
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))
        >>> executor = RequestExecutor(client=httpx.Client(transport=transport))
        >>> config = Config("https://example.test", email="a@b.c", api_token="t")
        >>> options = RequestCommandOptions(
        ...     "GET", "/rest/api/3/myself", output=OutputPreferences.from_flags(compact=True)
        ... )
        >>> executor.execute(config, options)  # doctest: +ELLIPSIS
        {"success":true,"data":{"ok":true},"error":null,"meta":{...}}
        0

        ```
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        retry_policy: RetryPolicy | None = None,
        renderer: OutputRenderer | None = None,
        auth_header_provider: Callable[[Config], tuple[str, str]] = create_auth_header,
        stdout: TextIO | None = None,
    ) -> None:
        self.client = client
        self.retry_policy = retry_policy if retry_policy is not None else RetryPolicy()
        self.renderer = renderer if renderer is not None else OutputRenderer()
        self.auth_header_provider = auth_header_provider
        self._stdout = stdout

    def execute(
        self,
        config: Config,
        options: RequestCommandOptions,
        verbose_logger: VerboseLogger | None = None,
    ) -> int:
        """Execute the request described by ``options``.

        Exactly one rendered output is written to stdout. Precondition
        violations are rejected before any network activity. Non-success
        responses fail the process only when
        ``options.fail_on_non_success`` is set, while exceptions always
        do.

        Args:
            config: The runtime configuration.
            options: The request description and its policy flags.
            verbose_logger: The verbose logger of the invocation.

        Returns:
            The process exit code.
        """
        verbose = verbose_logger if verbose_logger is not None else VerboseLogger()

        if options.paginate and options.method != "GET":
            return self._write_validation_error(
                "--all/--paginate is only supported for GET requests.", options
            )
        if options.is_mutating and not options.confirmed:
            return self._write_validation_error(
                f"{options.method} is a mutating request and requires confirmation "
                "(--yes or --force).",
                options,
            )

        started = time.perf_counter()
        try:
            with self._open_client() as client:
                if options.paginate:
                    return self._execute_paginated(client, config, options, verbose, started)
                url = build_url(config.site_url, options.path, options.query)
                headers = self.build_headers(config, options)
                response = self._send_with_retries(client, config, options, url, headers, verbose)
                return self._handle_response(response, options, started)
        except (Exception, KeyboardInterrupt) as exc:
            with_traceback = not isinstance(exc, (httpx.TransportError, KeyboardInterrupt))
            logger.debug(f"{options.method} {options.path} failed: {exc!r}", exc_info=with_traceback)
            exit_code, error_code = from_exception(exc)
            envelope = Envelope.fail(
                ErrorInfo(
                    code=error_code,
                    message=_exception_message(exc),
                    details=None,
                    hint=EXCEPTION_HINT,
                ),
                Meta(
                    duration_ms=_elapsed_ms(started),
                    method=options.method,
                    path=options.path,
                ),
            )
            self._write_envelope(envelope, options)
            return int(exit_code)

    def build_headers(self, config: Config, options: RequestCommandOptions) -> httpx.Headers:
        """Build the request headers.

        ``Accept``, ``User-Agent`` and ``Authorization`` are computed,
        then the caller headers are merged (the caller wins on key
        collision). A request with a body gets the explicit content type
        of the options, else the caller ``Content-Type`` header, else
        ``application/json``.
        """
        headers = httpx.Headers({"Accept": options.accept, "User-Agent": USER_AGENT})
        scheme, value = self.auth_header_provider(config)
        headers["Authorization"] = f"{scheme} {value}"
        for key, header_value in options.headers:
            headers[key] = header_value
        if _has_body(options):
            if options.content_type and options.content_type.strip():
                headers["Content-Type"] = options.content_type
            elif "Content-Type" not in headers:
                headers["Content-Type"] = "application/json"
        return headers

    def _open_client(self) -> contextlib.AbstractContextManager[httpx.Client]:
        if self.client is not None:
            return contextlib.nullcontext(self.client)
        return httpx.Client()

    def _send_with_retries(
        self,
        client: httpx.Client,
        config: Config,
        options: RequestCommandOptions,
        url: str,
        headers: httpx.Headers,
        verbose: VerboseLogger,
    ) -> httpx.Response:
        """Send the request, retrying per the retry policy.

        The last response is returned as-is even when its status is an
        error. The last exception is raised when no attempt produced a
        response.
        """
        can_retry = self.retry_policy.is_method_retryable(
            options.method, options.retry_non_idempotent
        )
        max_attempts = max(1, config.max_retries + 1)
        verbose.verbose(f"Request headers: {redact_headers(headers)}")

        for attempt in range(1, max_attempts + 1):
            result = self._attempt(client, config, options, url, headers, verbose, attempt, max_attempts)
            if result.outcome is AttemptOutcome.SUCCESS:
                return result.response
            if result.outcome is AttemptOutcome.FATAL_FAILURE:
                raise result.error
            if not can_retry or attempt == max_attempts:
                if result.response is not None:
                    return result.response
                raise result.error

            if result.response is not None:
                verbose.verbose(
                    f"Retryable response {result.response.status_code} "
                    f"{result.response.reason_phrase}"
                )
                result.response.close()
            else:
                verbose.verbose(f"Retryable exception {type(result.error).__name__}: {result.error}")
            self.retry_policy.wait(result.response, attempt, config, verbose)

        msg = "Request failed after retries."  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover

    def _attempt(
        self,
        client: httpx.Client,
        config: Config,
        options: RequestCommandOptions,
        url: str,
        headers: httpx.Headers,
        verbose: VerboseLogger,
        attempt: int,
        max_attempts: int,
    ) -> AttemptResult:
        request = client.build_request(
            options.method,
            url,
            headers=headers,
            content=options.body.encode("utf-8") if _has_body(options) else None,
            timeout=config.timeout_seconds,
        )
        verbose.verbose(f"Sending {options.method} {url} attempt={attempt}/{max_attempts}")
        try:
            response = client.send(request)
        except Exception as exc:
            if self.retry_policy.should_retry_exception(exc):
                return AttemptResult(AttemptOutcome.RETRYABLE_FAILURE, error=exc)
            return AttemptResult(AttemptOutcome.FATAL_FAILURE, error=exc)

        if self.retry_policy.should_retry_response(response):
            return AttemptResult(AttemptOutcome.RETRYABLE_FAILURE, response=response)
        return AttemptResult(AttemptOutcome.SUCCESS, response=response)

    def _handle_response(
        self,
        response: httpx.Response,
        options: RequestCommandOptions,
        started: float,
    ) -> int:
        try:
            payload = response.read()
        finally:
            response.close()
        duration_ms = _elapsed_ms(started)

        if options.out_path and options.out_path.strip():
            data = save_body_to_file(response, payload, options.out_path)
        else:
            data = parse_payload(response, payload)

        meta = Meta(
            request_id=get_request_id(response),
            duration_ms=duration_ms,
            status_code=response.status_code,
            method=options.method,
            path=options.path,
        )

        if not is_success(response):
            exit_code, error_code = from_http_status(response.status_code)
            envelope = Envelope.fail(build_http_error(response, error_code, data), meta)
            self._write_envelope(envelope, options)
            return int(exit_code) if options.fail_on_non_success else int(ExitCode.SUCCESS)

        self._write_envelope(Envelope.ok(data, meta), options)
        return int(ExitCode.SUCCESS)

    def _execute_paginated(
        self,
        client: httpx.Client,
        config: Config,
        options: RequestCommandOptions,
        verbose: VerboseLogger,
        started: float,
    ) -> int:
        """Fetch every page of a ``startAt`` paginated list endpoint.

        The pages are combined into one document holding the keys of
        the first page and the concatenated ``values``, which is then
        handled like a regular response.
        """
        start_at = _initial_start_at(options, verbose)
        base_query = [(key, value) for key, value in options.query if key.lower() != "startat"]
        headers = self.build_headers(config, options)
        accumulated: list = []
        template = None
        last_request: httpx.Request | None = None

        while True:
            page_options = options.with_query([*base_query, ("startAt", str(start_at))])
            url = build_url(config.site_url, page_options.path, page_options.query)
            response = self._send_with_retries(client, config, page_options, url, headers, verbose)
            if not is_success(response):
                return self._handle_response(response, options, started)

            try:
                root = loads_json(response.text)
            finally:
                response.close()
            last_request = response.request
            if template is None:
                template = root

            page = extract_page(root, start_at)
            accumulated.extend(page.values)
            verbose.verbose(
                f"Fetched page startAt={start_at} items={len(page.values)} "
                f"accumulated={len(accumulated)}"
            )
            if page.is_last:
                break
            if not page.values:
                verbose.verbose(f"Empty page at startAt={start_at} before the reported end, stopping")
                break
            start_at = page.next_start_at

        combined = build_combined_output(template, accumulated)
        synthetic = httpx.Response(
            200,
            headers={"Content-Type": "application/json"},
            content=dumps_json(combined).encode("utf-8"),
            request=last_request,
        )
        return self._handle_response(synthetic, options, started)

    def _write_validation_error(self, message: str, options: RequestCommandOptions) -> int:
        envelope = Envelope.fail(ErrorInfo(code=ErrorCode.VALIDATION, message=message))
        self._write_envelope(envelope, options)
        return int(ExitCode.VALIDATION)

    def _write_envelope(self, envelope: Envelope, options: RequestCommandOptions) -> None:
        text = self.renderer.render(envelope, options.output)
        stream = self._stdout if self._stdout is not None else sys.stdout
        print(text, file=stream)


def _has_body(options: RequestCommandOptions) -> bool:
    return options.body is not None and bool(options.body.strip())


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _initial_start_at(options: RequestCommandOptions, verbose: VerboseLogger) -> int:
    for key, value in options.query:
        if key.lower() != "startat":
            continue
        try:
            return max(0, int(value))
        except ValueError:
            verbose.verbose(f"Ignoring non-numeric startAt={value!r}, starting at 0")
            return 0
    return 0


def _exception_message(exc: BaseException) -> str:
    if isinstance(exc, KeyboardInterrupt):
        return "Operation cancelled."
    return str(exc) or type(exc).__name__
