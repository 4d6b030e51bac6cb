import json

from eightstream.errors import NetworkError
from eightstream.fetcher import Fetcher

API = "https://ftmoh345xme.com"
TMDB = "https://api.themoviedb.org/3"


class FakeFetcher(Fetcher):
    """Fetcher that serves canned bodies by URL and records every request."""

    def __init__(self, routes=None):
        super().__init__()
        self.routes = dict(routes or {})
        self.calls = []

    async def get(self, url, *, headers=None, params=None, proxied=True):
        self.calls.append({"url": url, "headers": headers or {}, "params": params, "proxied": proxied})
        body = self.routes.get(url)
        if body is None:
            raise NetworkError("Response not OK: 404 Not Found", url=url, status=404)
        if isinstance(body, Exception):
            raise body
        if not isinstance(body, str):
            body = json.dumps(body)
        return body

    def urls(self):
        return [c["url"] for c in self.calls]


def play_page(config_js):
    return (
        "<html><head><script src='/jquery.js'></script>"
        "<script>window.ready = true;</script></head>"
        f"<body><div id='player'></div><script>{config_js}</script></body></html>"
    )


MASTER = """#EXTM3U
#EXT-X-STREAM-INF:BANDWIDTH=5000000,RESOLUTION=1920x1080
1080/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2800000,RESOLUTION=1280x720
720/index.m3u8
"""
