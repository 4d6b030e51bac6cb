"""
Core types for the eightstream resolver.

Output is a flat list of StreamResult (url + quality label). Playlist
JSON from the site is converted into a tagged union up front:
  - MoviePlaylist: flat list of language files
  - SeriesPlaylist: season → episode → language file
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Union

PROVIDER = "eightstream"

# ──────────────────────────────
#  Final output
# ──────────────────────────────
@dataclass(frozen=True)
class StreamResult:
    url: str
    quality: str = "Auto"             # "1080p" | "720p" | "Quality 2" | "Auto"
    provider: str = PROVIDER

    def to_dict(self):
        return {"url": self.url, "quality": self.quality, "provider": self.provider}

# ──────────────────────────────
#  Page config (embedded JSON on /play/{id})
# ──────────────────────────────
@dataclass
class MediaConfig:
    file: str                         # playlist URL, absolute or site-root relative
    key: str                          # X-Csrf-Token value

# ──────────────────────────────
#  Playlist entries
# ──────────────────────────────
@dataclass
class FileEntry:
    title: str = ""
    file: Optional[str] = None        # "/..." path fed to the manifest resolver

    @property
    def is_english(self) -> bool:
        return isinstance(self.title, str) and self.title.lower() == "english"

    @classmethod
    def from_raw(cls, raw: dict) -> "FileEntry":
        return cls(title=raw.get("title") or "", file=raw.get("file"))


@dataclass
class EpisodeEntry:
    episode: Any                      # kept as returned by the site, compared as-is
    folder: list[FileEntry] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict) -> "EpisodeEntry":
        return cls(episode=raw.get("episode"), folder=parse_entries(raw.get("folder"), FileEntry))


@dataclass
class SeasonEntry:
    id: Any
    folder: list[EpisodeEntry] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict) -> "SeasonEntry":
        return cls(id=raw.get("id"), folder=parse_entries(raw.get("folder"), EpisodeEntry))


@dataclass
class MoviePlaylist:
    files: list[FileEntry] = field(default_factory=list)


@dataclass
class SeriesPlaylist:
    seasons: list[SeasonEntry] = field(default_factory=list)


Playlist = Union[MoviePlaylist, SeriesPlaylist]


def parse_entries(raw, entry_cls) -> list:
    # Missing folders are empty; non-object items keep their slot as blank entries
    if not isinstance(raw, list):
        return []
    return [entry_cls.from_raw(item if isinstance(item, dict) else {}) for item in raw]

# ──────────────────────────────
#  Media context (passed to the scraper)
# ──────────────────────────────
@dataclass
class MediaContext:
    tmdb_id: Union[int, str]
    media_type: str = "movie"         # "movie" | "tv"
    season: Optional[int] = None
    episode: Optional[int] = None

    def __post_init__(self):
        # Normalize: accept both "show" and "tv" → always "tv"
        if self.media_type == "show":
            self.media_type = "tv"
