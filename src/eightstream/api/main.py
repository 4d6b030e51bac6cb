from fastapi import FastAPI, HTTPException

from eightstream.base import PROVIDER
from eightstream.config import Settings
from eightstream.source import get_streams

settings = Settings.from_env()

app = FastAPI(title="eightstream")


@app.get("/")
def read_index():
    return {"provider": PROVIDER, "status": "ok"}


@app.get("/streams/{media_type}/{tmdb_id}")
async def streams(media_type: str, tmdb_id: int, season: int = 1, episode: int = 1):
    if media_type not in ("movie", "tv", "show"):
        raise HTTPException(status_code=400, detail=f"Unsupported media type: {media_type}")

    results = await get_streams(tmdb_id, media_type, season, episode, settings=settings)
    return {"streams": [s.to_dict() for s in results]}
