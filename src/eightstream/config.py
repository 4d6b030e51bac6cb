"""
Process configuration. The pipeline never reads the environment itself;
the CLI and the HTTP app build a Settings via from_env() and pass it in.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_TIMEOUT = 15

# First non-empty wins
PROXY_ENV_VARS = ("EIGHTSTREAM_PROXY_URL", "SHOWBOX_PROXY_URL_VALUE")


@dataclass(frozen=True)
class Settings:
    proxy_url: Optional[str] = None   # forward proxy base, target URL is appended encoded
    tmdb_api_key: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()
        proxy = next((os.getenv(name) for name in PROXY_ENV_VARS if os.getenv(name)), None)
        return cls(
            proxy_url=proxy,
            tmdb_api_key=os.getenv("TMDB_API_KEY") or None,
        )
