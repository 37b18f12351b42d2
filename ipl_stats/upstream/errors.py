"""Exceptions raised by the upstream HTTP clients."""

from __future__ import annotations


class UpstreamError(Exception):
    """An upstream source could not provide a usable payload.

    Raised for timeouts, transport failures, non-2xx responses, undecodable
    bodies and payloads that do not match the expected schema. Providers catch
    exactly this type and switch to synthesized data.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"[{source}] {message}")
        self.source = source
        self.reason = message


class UpstreamNotConfiguredError(UpstreamError):
    """No API key is configured for the upstream source."""

    def __init__(self, source: str) -> None:
        super().__init__(source, "API key not configured")
