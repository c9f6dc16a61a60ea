r"""Output transformation and rendering pipeline."""

from __future__ import annotations

__all__ = [
    "JsonStyle",
    "OutputFormat",
    "OutputPreferences",
    "OutputRenderer",
    "extract_scalar_text",
    "to_scalar_string",
    "transform_data",
]

from resproxy.output.preferences import JsonStyle, OutputFormat, OutputPreferences
from resproxy.output.renderer import OutputRenderer
from resproxy.output.transformer import extract_scalar_text, to_scalar_string, transform_data
