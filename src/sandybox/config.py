"""Runtime settings loaded from ``SANDYBOX_*`` environment variables.

Every setting has a working default, so ``Settings()`` is usable as-is.
:meth:`Settings.from_env` overlays environment overrides on top of
those defaults and raises :class:`~sandybox.exceptions.ConfigurationError`
for values that cannot be parsed.
"""

from __future__ import annotations

import math
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from sandybox.exceptions import ConfigurationError

DEFAULT_SEARCH_ENDPOINT: str = "https://api.duckduckgo.com/"
DEFAULT_FORM_URL: str = "https://httpbin.org/forms/post"
DEFAULT_USER_AGENT: str = "SandyBox-Integration/1.0"


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime configuration."""

    search_endpoint: str = DEFAULT_SEARCH_ENDPOINT
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = 10.0
    """Seconds before an instant-answer request is abandoned."""

    form_url: str = DEFAULT_FORM_URL
    browser_timeout_ms: int = 30_000
    """Browser launch/navigation timeout in milliseconds."""

    headless: bool = True
    max_retries: int = 3
    backoff_base: float = 1.0
    """Multiplier for the ``2 ** attempt`` second delay between retries."""

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for field in fields(cls):
            var = f"SANDYBOX_{field.name.upper()}"
            raw = env.get(var)
            if raw is None or raw.strip() == "":
                continue
            parser = _PARSERS.get(field.name, str)
            try:
                overrides[field.name] = parser(raw.strip())
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid value for {var}: {raw!r}",
                    hint=str(exc),
                ) from exc
        return cls(**overrides)


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError("expected one of 1/0, true/false, yes/no, on/off")


def _parse_positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise ValueError("must be a positive integer")
    return value


def _parse_positive_float(raw: str) -> float:
    value = float(raw)
    if not (math.isfinite(value) and value > 0):
        raise ValueError("must be a positive number")
    return value


def _parse_non_negative_float(raw: str) -> float:
    value = float(raw)
    if not (math.isfinite(value) and value >= 0):
        raise ValueError("must be a non-negative number")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError("expected DEBUG, INFO, WARNING, ERROR or CRITICAL")
    return level


_PARSERS: dict[str, Callable[[str], Any]] = {
    "http_timeout": _parse_positive_float,
    "browser_timeout_ms": _parse_positive_int,
    "headless": _parse_bool,
    "max_retries": _parse_positive_int,
    "backoff_base": _parse_non_negative_float,
    "log_level": _parse_log_level,
}
