"""
Playlist navigator: picks the language file to resolve.

Movies: [{title, file}, ...]
Series: [{id: "1", folder: [{episode: "1", folder: [{title, file}, ...]}]}]

Season and episode numbers are matched by exact string equality against
what the site returns ("1" matches 1, "01" does not).
"""
from __future__ import annotations
from typing import Optional

from .base import (
    FileEntry, MoviePlaylist, Playlist, SeasonEntry, SeriesPlaylist, parse_entries,
)
from .errors import NotFoundError, ValidationError


def parse_playlist(raw, media_type: str) -> Playlist:
    """Build the playlist union for ``media_type``. Shape is never guessed."""
    if media_type == "movie":
        if not raw or not isinstance(raw, list):
            raise ValidationError("Invalid movie playlist.")
        return MoviePlaylist(files=parse_entries(raw, FileEntry))
    if media_type in ("tv", "show"):
        if not raw or not isinstance(raw, list):
            raise ValidationError("Invalid TV playlist.")
        return SeriesPlaylist(seasons=parse_entries(raw, SeasonEntry))
    raise ValidationError(f"Unsupported media type: {media_type}")


def prefer_english(files: list[FileEntry]) -> Optional[FileEntry]:
    return next((f for f in files if f.is_english), files[0] if files else None)


def select_movie_file(playlist: MoviePlaylist) -> FileEntry:
    target = prefer_english(playlist.files)
    if target is None:
        raise NotFoundError("Movie playlist has no files.")
    return target


def select_episode_file(playlist: SeriesPlaylist, season, episode) -> FileEntry:
    season_data = next((s for s in playlist.seasons if s.id == str(season)), None)
    if season_data is None:
        raise NotFoundError(f"Season {season} not found.")

    episode_data = next((e for e in season_data.folder if e.episode == str(episode)), None)
    if episode_data is None:
        raise NotFoundError(f"Episode {episode} not found.")

    target = prefer_english(episode_data.folder)
    if target is None:
        raise NotFoundError(f"Episode {episode} has no files.")
    return target


def find_target_file(raw, media_type: str, season=None, episode=None) -> FileEntry:
    playlist = parse_playlist(raw, media_type)
    if isinstance(playlist, MoviePlaylist):
        target = select_movie_file(playlist)
    else:
        target = select_episode_file(playlist, season, episode)

    if not target.file:
        raise NotFoundError("Could not find a suitable media file.")
    return target
