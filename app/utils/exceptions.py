"""Custom exception classes."""

from typing import Optional


class KosherChefException(Exception):
    """Base exception for the Kosher Chef application."""

    reason = "internal_error"


class NoAppliancesConfigured(KosherChefException):
    """Raised when a prompt is compiled without any owned appliance."""

    reason = "no_appliances_configured"

    def __init__(self, message: str = "No appliances provided. Please set up your kitchen first.") -> None:
        super().__init__(message)


class UpstreamUnavailable(KosherChefException):
    """Raised when the Gemini API call fails (network, auth, quota)."""

    reason = "upstream_unavailable"


class UpstreamTimeout(UpstreamUnavailable):
    """Raised when the Gemini API call does not finish in time."""

    reason = "upstream_timeout"

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Recipe generation timed out after {timeout:g} seconds")
        self.timeout = timeout


class MalformedResponse(KosherChefException):
    """Raised when the model output is not a valid recipe document."""

    reason = "malformed_response"


class InvalidInput(KosherChefException):
    """Raised when wizard answers fail validation at submit time."""

    reason = "invalid_input"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
