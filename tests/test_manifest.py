import asyncio

import pytest

from eightstream.base import StreamResult
from eightstream.errors import ValidationError
from eightstream.manifest import is_m3u8, parse_manifest, resolve_manifest_url

from conftest import API, MASTER, FakeFetcher

BASE = "https://cdn.example/hls/x.m3u8"


def test_master_playlist_expands_variants_in_order():
    streams = parse_manifest(MASTER, BASE)
    assert streams == [
        StreamResult(url="https://cdn.example/hls/1080/index.m3u8", quality="1080p"),
        StreamResult(url="https://cdn.example/hls/720/index.m3u8", quality="720p"),
    ]
    assert all(s.provider == "eightstream" for s in streams)


def test_variant_without_resolution_gets_numbered_label():
    content = (
        "#EXTM3U\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=640x360\n"
        "low.m3u8\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=400000\n"
        "https://other.example/audio.m3u8\n"
    )
    streams = parse_manifest(content, BASE)
    assert [s.quality for s in streams] == ["360p", "Quality 2"]
    assert streams[1].url == "https://other.example/audio.m3u8"


def test_media_playlist_is_single_auto_entry():
    content = "#EXTM3U\n#EXT-X-TARGETDURATION:10\n#EXTINF:10,\nseg0.ts\n#EXT-X-ENDLIST\n"
    assert parse_manifest(content, BASE) == [StreamResult(url=BASE, quality="Auto")]


@pytest.mark.parametrize("content", ["", "\x00\xff\xfe garbage \x89PNG", "<html>nope</html>"])
def test_parser_never_raises(content):
    assert parse_manifest(content, BASE) == [StreamResult(url=BASE, quality="Auto")]


def test_parser_is_idempotent():
    assert parse_manifest(MASTER, BASE) == parse_manifest(MASTER, BASE)


def test_signature_check():
    assert is_m3u8(MASTER)
    assert not is_m3u8("https://cdn.example/file.mp4")


def test_resolver_builds_txt_url_with_token():
    fetcher = FakeFetcher({f"{API}/playlist/abc/def.txt": "https://cdn.example/x.m3u8\n"})
    link = asyncio.run(resolve_manifest_url(fetcher, "/abc/def", "tok"))
    assert link == "https://cdn.example/x.m3u8"
    assert fetcher.calls[0]["headers"]["X-Csrf-Token"] == "tok"
    assert fetcher.calls[0]["headers"]["Referer"] == "https://google.com/"


@pytest.mark.parametrize("file_path", [None, "", 42])
def test_resolver_rejects_bad_path_before_fetching(file_path):
    fetcher = FakeFetcher()
    with pytest.raises(ValidationError):
        asyncio.run(resolve_manifest_url(fetcher, file_path, "tok"))
    assert fetcher.calls == []


def test_resolver_keeps_leading_whitespace():
    fetcher = FakeFetcher({f"{API}/playlist/abc.txt": "  https://cdn.example/x.m3u8\r\n"})
    link = asyncio.run(resolve_manifest_url(fetcher, "/abc", "tok"))
    assert link == "  https://cdn.example/x.m3u8"
