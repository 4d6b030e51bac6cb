"""
EightStream: TMDB id → IMDb id → /play page JSON → language playlist →
/playlist/{file}.txt → m3u8 → quality variants.

get_streams() is the public entry point and never raises: every failure
after the id lookup is logged and turned into an empty list.
"""
from __future__ import annotations
import logging
from typing import Optional, Union

from .base import MediaContext, StreamResult
from .config import Settings
from .errors import ValidationError
from .fetcher import Fetcher
from .manifest import is_m3u8, parse_manifest, resolve_manifest_url
from .page import get_media_info
from .playlist import find_target_file
from .tmdb import tmdb_to_imdb

log = logging.getLogger("eightstream.source")


class EightStream:
    id = "eightstream"
    name = "8Stream"
    rank = 100
    media_types = ["movie", "tv"]

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key

    async def scrape(self, ctx: MediaContext, fetcher: Fetcher) -> list[StreamResult]:
        """Run the pipeline for ``ctx``. Raises on failure after the id lookup."""
        imdb_id = await tmdb_to_imdb(fetcher, ctx.tmdb_id, ctx.media_type, self.api_key)
        if not imdb_id:
            log.error("[eightstream] Could not get IMDb ID for TMDB ID %s. Skipping.", ctx.tmdb_id)
            return []
        log.info("[eightstream] Converted TMDB ID %s to IMDb ID %s", ctx.tmdb_id, imdb_id)

        playlist, key = await get_media_info(fetcher, imdb_id)
        target = find_target_file(playlist, ctx.media_type, ctx.season, ctx.episode)

        m3u8_link = await resolve_manifest_url(fetcher, target.file, key)
        if not m3u8_link.startswith("http"):
            raise ValidationError(f"Invalid M3U8 link: {m3u8_link[:200]}")

        content = await fetcher.get(m3u8_link)
        if not is_m3u8(content):
            log.warning("[eightstream] Content is not M3U8. Returning direct link.")
            return [StreamResult(url=m3u8_link, quality="Auto")]

        streams = parse_manifest(content, m3u8_link)
        log.info("[eightstream] Extracted %d streams.", len(streams))
        return streams


async def get_streams(
    tmdb_id: Union[int, str],
    media_type: str,
    season: Optional[int] = None,
    episode: Optional[int] = None,
    api_key: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    fetcher: Optional[Fetcher] = None,
) -> list[StreamResult]:
    """
    Resolve streams for a movie or TV episode. Always returns a list.

    ``settings`` supplies the proxy, timeout and fallback API key. A
    ``fetcher`` passed in is left open; one created here is closed.
    """
    settings = settings or Settings()
    ctx = MediaContext(tmdb_id=tmdb_id, media_type=media_type, season=season, episode=episode)
    log.info("[eightstream] Getting streams for TMDB ID: %s, Type: %s", tmdb_id, ctx.media_type)

    owned = fetcher is None
    if owned:
        fetcher = Fetcher(timeout=settings.timeout, proxy_url=settings.proxy_url)
    try:
        return await EightStream(api_key or settings.tmdb_api_key).scrape(ctx, fetcher)
    except Exception as e:
        log.error("[eightstream] Error in get_streams: %s", e)
        return []
    finally:
        if owned:
            await fetcher.close()
