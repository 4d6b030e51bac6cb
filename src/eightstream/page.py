"""
Page fetcher: /play/{imdb_id} → embedded JSON config → language playlist.

Flow:
  1. {API_BASE}/play/{imdb_id}   → HTML, last <script> holds a JSON literal
  2. JSON literal                 → {"file": playlist url, "key": csrf token}
  3. playlist url + X-Csrf-Token  → playlist JSON (flat for movies, nested for tv)

The site has shipped two markups for step 1, so extraction is a list of
strategies tried in order. Append to EXTRACTORS to support a new variant.
"""
from __future__ import annotations
import json
import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup

from .base import MediaConfig
from .errors import ExtractionError, MissingFieldError, ParseError
from .fetcher import Fetcher

log = logging.getLogger("eightstream.page")

API_BASE = "https://ftmoh345xme.com"
ORIGIN = "https://friness-cherlormur-i-275.site"
HEADERS = {"Origin": ORIGIN, "Referer": "https://google.com/", "Dnt": "1"}

Extractor = Callable[[str], Optional[str]]


def _regex_extractor(pattern: str, flags: int = 0) -> Extractor:
    compiled = re.compile(pattern, flags)

    def extract(script: str) -> Optional[str]:
        m = compiled.search(script)
        return m.group(1) if m else None

    return extract


EXTRACTORS: list[Extractor] = [
    _regex_extractor(r"(\{[^;]+});"),         # var x = {...};
    _regex_extractor(r"\((\{.*\})\)"),        # new Player({...})
]


def auth_headers(key: str) -> dict:
    return {**HEADERS, "X-Csrf-Token": key}


def last_script(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    scripts = soup.find_all("script")
    script = scripts[-1].string if scripts else None
    if not script:
        raise ExtractionError("Could not find script tag with media data.")
    return script


def extract_config(script: str, extractors: list[Extractor] | None = None) -> MediaConfig:
    raw = None
    for extractor in extractors or EXTRACTORS:
        raw = extractor(script)
        if raw:
            break
    if not raw:
        raise ExtractionError("Could not extract media JSON from script.")

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ParseError(f"Media JSON is malformed: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("Media JSON is not an object.")

    playlist_url = data.get("file")
    if not playlist_url:
        raise MissingFieldError("Playlist URL not found in media JSON.")
    if not isinstance(playlist_url, str):
        raise ParseError("Playlist URL in media JSON is not a string.")
    if playlist_url.startswith("/"):
        playlist_url = API_BASE + playlist_url

    key = data.get("key")
    if not key:
        raise MissingFieldError("CSRF key not found in media JSON.")

    return MediaConfig(file=playlist_url, key=key)


async def get_media_info(fetcher: Fetcher, imdb_id: str) -> tuple[dict | list, str]:
    """Return (raw playlist JSON, csrf key) for ``imdb_id``."""
    url = f"{API_BASE}/play/{imdb_id}"
    log.info("[eightstream] Fetching initial info from: %s", url)
    html = await fetcher.get(url, headers=HEADERS)

    config = extract_config(last_script(html))

    log.info("[eightstream] Fetching language playlist from: %s", config.file)
    playlist = await fetcher.get_json(config.file, headers=auth_headers(config.key))
    return playlist, config.key
