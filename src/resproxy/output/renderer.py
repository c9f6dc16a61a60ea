r"""Serialize envelopes to JSON, JSON Lines or text."""

from __future__ import annotations

__all__ = ["OutputRenderer"]

from typing import TYPE_CHECKING, Any

from resproxy.output.preferences import JsonStyle, OutputFormat
from resproxy.output.transformer import extract_scalar_text, transform_data
from resproxy.utils.json_text import dumps_json

if TYPE_CHECKING:
    from resproxy.envelope import Envelope
    from resproxy.output.preferences import OutputPreferences


class OutputRenderer:
    """Render an envelope according to the output preferences.

    Example:
        ```pycon
        >>> from resproxy.envelope import Envelope
        >>> from resproxy.output import OutputPreferences, OutputRenderer
        >>> renderer = OutputRenderer()
        >>> print(renderer.render(Envelope.ok("hello"), OutputPreferences.from_flags("text")))
        hello

        ```
    """

    def render(self, envelope: Envelope, preferences: OutputPreferences) -> str:
        """Render with the format selected in ``preferences``."""
        if preferences.format is OutputFormat.TEXT:
            return self.render_text(envelope, preferences)
        return self.render_envelope(envelope, preferences)

    def render_envelope(self, envelope: Envelope, preferences: OutputPreferences) -> str:
        """Render the whole envelope as JSON or JSON Lines.

        With the JSON Lines format and array data, one compact envelope
        is emitted per element. Non-array data falls back to a single
        JSON document.
        """
        transformed = envelope.with_data(transform_data(envelope.data, preferences))
        if preferences.format is OutputFormat.JSONL and isinstance(transformed.data, list):
            return "\n".join(
                _dumps(transformed.with_data(item).to_dict(), JsonStyle.COMPACT)
                for item in transformed.data
            )
        return _dumps(transformed.to_dict(), preferences.json_style)

    def render_text(self, envelope: Envelope, preferences: OutputPreferences) -> str:
        """Render the data without the envelope wrapper.

        A failing envelope renders its error message only.
        """
        if not envelope.success:
            if envelope.error is None:
                return "Unknown error"
            return envelope.error.message

        data = transform_data(envelope.data, preferences)
        if data is None:
            return ""
        if preferences.plain:
            return extract_scalar_text(data)
        if isinstance(data, str):
            return data
        return _dumps(data, preferences.json_style)


def _dumps(value: Any, style: JsonStyle) -> str:
    if style is JsonStyle.COMPACT:
        return dumps_json(value, separators=(",", ":"))
    return dumps_json(value, indent=2)
