"""TMDB → IMDb id lookup. Soft-fails to None, never raises."""
from __future__ import annotations
import logging
from typing import Optional, Union

from .errors import EightStreamError
from .fetcher import Fetcher

log = logging.getLogger("eightstream.tmdb")

TMDB_API = "https://api.themoviedb.org/3"


async def tmdb_to_imdb(
    fetcher: Fetcher,
    tmdb_id: Union[int, str],
    media_type: str,
    api_key: Optional[str],
) -> Optional[str]:
    if not api_key:
        log.warning("[eightstream] TMDB_API_KEY not found, cannot convert to IMDb ID.")
        return None

    kind = "movie" if media_type == "movie" else "tv"
    url = f"{TMDB_API}/{kind}/{tmdb_id}/external_ids"
    try:
        data = await fetcher.get_json(url, params={"api_key": api_key}, proxied=False)
    except EightStreamError as e:
        log.error("[eightstream] Error converting TMDB to IMDb: %s", e)
        return None

    imdb_id = data.get("imdb_id") if isinstance(data, dict) else None
    if not imdb_id:
        log.error("[eightstream] TMDB returned no IMDb ID for %s %s", kind, tmdb_id)
        return None
    return imdb_id
