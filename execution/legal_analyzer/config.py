"""
Process configuration for the Legal Document Analyzer.

Built once at startup from environment variables (and an optional .env file)
and shared read-only by every request.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_MAX_UPLOAD_MB = 10


@dataclass(frozen=True)
class AnalyzerConfig:
    """Immutable per-process settings."""
    api_key: str
    model_name: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls, env: Optional[dict] = None) -> "AnalyzerConfig":
        """
        Build configuration from the environment.

        Args:
            env: Mapping to read instead of os.environ (loads .env when omitted)

        Raises:
            ConfigurationError: GEMINI_API_KEY is absent or a numeric
                setting is not a positive number
        """
        if env is None:
            load_dotenv()
            env = os.environ

        api_key = (env.get("GEMINI_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in the environment or .env file")

        timeout = _positive_number(env, "GEMINI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        max_upload_mb = _positive_number(env, "MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB)

        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            api_key=api_key,
            model_name=env.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            timeout_seconds=timeout,
            max_upload_bytes=int(max_upload_mb * 1024 * 1024),
            cors_origins=tuple(origins) or ("*",),
        )


def _positive_number(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return float(default)
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
