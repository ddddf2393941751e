from __future__ import annotations

import math
import os
from dataclasses import dataclass

from ._errors import ConfigurationError

DEFAULT_API_URL = "https://api.random.org/json-rpc/4/invoke"
DEFAULT_PLAIN_URL = "https://www.random.org/integers/"
DEFAULT_TIMEOUT = 30.0


def resolve_api_url(api_url: str | None = None) -> str:
    return api_url or os.environ.get("RANDOM_ORG_API_URL") or DEFAULT_API_URL


def resolve_plain_url(plain_url: str | None = None) -> str:
    url = plain_url or os.environ.get("RANDOM_ORG_PLAIN_URL") or DEFAULT_PLAIN_URL
    if not url.endswith("/"):
        url += "/"
    return url


def resolve_api_key(api_key: str | None = None) -> str | None:
    return api_key or os.environ.get("RANDOM_ORG_API_KEY") or None


def resolve_timeout(timeout: float | None = None) -> float:
    if timeout is None:
        raw = os.environ.get("RANDOM_ORG_TIMEOUT")
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            raise ConfigurationError(
                f"RANDOM_ORG_TIMEOUT must be a number of seconds, got {raw!r}."
            ) from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"Timeout must be a positive finite number of seconds, got {timeout}.")
    return float(timeout)


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    plain_url: str = DEFAULT_PLAIN_URL
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        self.timeout = resolve_timeout(self.timeout)

    @classmethod
    def from_env(
        cls,
        api_url: str | None = None,
        plain_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> Settings:
        return cls(
            api_url=resolve_api_url(api_url),
            plain_url=resolve_plain_url(plain_url),
            api_key=resolve_api_key(api_key),
            timeout=resolve_timeout(timeout),
        )


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_PLAIN_URL",
    "DEFAULT_TIMEOUT",
    "Settings",
    "resolve_api_url",
    "resolve_plain_url",
    "resolve_api_key",
    "resolve_timeout",
]
