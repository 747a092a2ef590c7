"""
Error taxonomy for the Legal Document Analyzer.

Request-scoped failures derive from AnalyzerError and carry the HTTP status
the API layer answers with. ConfigurationError is raised only at startup.
"""

from typing import Optional


class AnalyzerError(Exception):
    """Base class for failures surfaced to the caller as a JSON error body."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInput(AnalyzerError):
    """Request shape is malformed (bad content type, corrupt body)."""

    status_code = 400


class NoContent(AnalyzerError):
    """Neither document text nor a document file was provided."""

    status_code = 400

    def __init__(self, message: str = "No document text or file provided."):
        super().__init__(message)


class PayloadTooLarge(AnalyzerError):
    """Uploaded file exceeds the configured size bound."""

    status_code = 413

    def __init__(self, size: int, limit: int):
        super().__init__(
            "Uploaded document is too large.",
            details=f"{size} bytes exceeds the limit of {limit} bytes",
        )
        self.size = size
        self.limit = limit


class UpstreamUnavailable(AnalyzerError):
    """The model service call itself failed (network, auth, quota, timeout)."""

    status_code = 500

    def __init__(self, details: str):
        super().__init__("An internal server error occurred.", details=details)


class MalformedUpstreamResponse(AnalyzerError):
    """The model replied, but no valid JSON object could be extracted.

    ``details`` holds the raw model text (no brace span found) or the
    attempted substring (span found but not valid JSON).
    """

    status_code = 502

    def __init__(self, details: str):
        super().__init__("AI response was not valid JSON.", details=details)


class ConfigurationError(Exception):
    """Required process configuration is missing or invalid."""
