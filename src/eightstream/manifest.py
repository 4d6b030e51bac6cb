"""
Manifest resolver and parser.

The site hands back the real m3u8 link as plain text from
{API_BASE}/playlist/{file}.txt; that playlist is then expanded into one
StreamResult per quality variant.
"""
from __future__ import annotations
import logging
from urllib.parse import urljoin

import m3u8

from .base import StreamResult
from .errors import ValidationError
from .fetcher import Fetcher
from .page import API_BASE, auth_headers

log = logging.getLogger("eightstream.manifest")

M3U8_SIGNATURE = "#EXTM3U"


async def resolve_manifest_url(fetcher: Fetcher, file_path, key: str) -> str:
    """Return the raw text served for ``file_path``; callers check it is a URL."""
    if not file_path or not isinstance(file_path, str):
        raise ValidationError("Invalid file path for final stream.")

    url = f"{API_BASE}/playlist/{file_path[1:]}.txt"
    log.info("[eightstream] Fetching final M3U8 link from: %s", url)
    text = await fetcher.get(url, headers=auth_headers(key))
    return text.rstrip()


def is_m3u8(content: str) -> bool:
    return M3U8_SIGNATURE in content


def _quality(playlist, index: int) -> str:
    resolution = playlist.stream_info.resolution if playlist.stream_info else None
    if resolution:
        return f"{resolution[1]}p"
    return f"Quality {index + 1}"


def parse_manifest(content: str, base_url: str) -> list[StreamResult]:
    """
    Expand a master playlist into quality variants, in manifest order.
    Media playlists, empty variant lists and anything unparseable collapse
    to a single "Auto" entry pointing at ``base_url``.
    """
    try:
        playlist = m3u8.loads(content, uri=base_url)
        if playlist.is_variant and playlist.playlists:
            return [
                StreamResult(url=urljoin(base_url, variant.uri), quality=_quality(variant, i))
                for i, variant in enumerate(playlist.playlists)
            ]
    except Exception as e:
        log.error("[eightstream] Failed to parse M3U8 playlist, returning direct link. %s", e)
    return [StreamResult(url=base_url, quality="Auto")]
