r"""Utility functions for header redaction, Retry-After parsing, JSON
path manipulation and logging."""

from __future__ import annotations

__all__ = [
    "JsonNumber",
    "StructuredFormatter",
    "VerboseLogger",
    "configure_logging",
    "dumps_json",
    "get_path",
    "loads_json",
    "mask_email",
    "mask_secret",
    "parse_json_object",
    "parse_retry_after",
    "redact_header",
    "set_path",
]

from resproxy.utils.json_path import get_path, parse_json_object, set_path
from resproxy.utils.json_text import JsonNumber, dumps_json, loads_json
from resproxy.utils.redact import mask_email, mask_secret, redact_header
from resproxy.utils.retry_after import parse_retry_after
from resproxy.utils.structured_logging import StructuredFormatter, VerboseLogger, configure_logging
