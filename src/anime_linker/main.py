import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import BackgroundTasks, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .checker import check_everything
from .config import Collection, Config, Mikan
from .data_models import RegularEpisode
from .exceptions import AnimeLinkerException, ConfigException
from .kernel import parse

logger = logging.getLogger("anime-linker.server")

app = FastAPI(title="Anime Linker Service")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


class ParseRequest(BaseModel):
    title: str = Field(..., description="待解析的发布标题",
                       examples=["[Lilith-Raws] 关于我在无意间被隔壁的天使变成废柴这件事 / Otonari no Tenshi-sama - 09 [Baha][WEB-DL][1080p][AVC AAC][CHT][MP4]"])
    season: Optional[int] = Field(default=None, description="季号覆盖")
    ep_revise: int = Field(default=0, description="集数修正")


class ParseResponse(BaseModel):
    kind: str
    record: Dict[str, Any]
    library_path: Optional[str] = None
    library_file_stem: Optional[str] = None
    logs: List[str]


class UrlForm(BaseModel):
    url: str


def to_resp(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"message": message})


def load_config() -> Config:
    return Config.load()


async def run_check():
    try:
        await check_everything(load_config())
    except Exception:
        logger.exception("后台检查失败")


@app.api_route("/", methods=["GET", "POST"])
async def hello():
    return "Hello, World!"


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.post("/parse", response_model=ParseResponse, summary="标题解析接口")
async def parse_title(req: ParseRequest):
    logs: List[str] = []
    try:
        ep = parse(req.title, current_logs=logs).with_episode_offset(req.ep_revise)
        if req.season is not None:
            ep = ep.with_season(req.season)
        name = ep.display_name()
        return ParseResponse(
            kind="regular" if isinstance(ep, RegularEpisode) else "special",
            record=asdict(ep),
            library_path=ep.library_path(name),
            library_file_stem=ep.library_file_stem(name),
            logs=logs,
        )
    except AnimeLinkerException as e:
        return JSONResponse(status_code=400, content={"message": e.message, "code": e.code, "logs": logs})


@app.post("/request-check")
async def request_check(background_tasks: BackgroundTasks):
    background_tasks.add_task(run_check)
    return to_resp(200, "check requested")


@app.get("/mikan")
async def find_mikan(bangumiId: Optional[str] = None):
    try:
        config = load_config()
    except ConfigException as e:
        return to_resp(500, e.message)
    if bangumiId is not None:
        found = [m.model_dump(mode="json") for m in config.mikan if f"bangumiId={bangumiId}" in m.url]
        return JSONResponse(status_code=200 if found else 404, content=found[:1])
    return [m.model_dump(mode="json") for m in config.mikan]


@app.post("/add-mikan")
async def add_mikan(m: Mikan):
    try:
        config = load_config()
        config.add_mikan(m)
        config.save()
    except (ConfigException, OSError) as e:
        return to_resp(400, str(e))
    return to_resp(200, "add success")


@app.post("/rm-mikan")
async def rm_mikan(form: UrlForm):
    try:
        config = load_config()
        config.rm_mikan(form.url)
        config.save()
    except (ConfigException, OSError) as e:
        return to_resp(500, str(e))
    return to_resp(200, "rm success")


@app.get("/collection")
async def find_collection(url: Optional[str] = None):
    try:
        config = load_config()
    except ConfigException as e:
        return to_resp(500, e.message)
    if url is not None:
        found = [c.model_dump(mode="json") for c in config.collections if c.torrent_url == url]
        return JSONResponse(status_code=200 if found else 404, content=found[:1])
    return [c.model_dump(mode="json") for c in config.collections]


@app.post("/add-collection")
async def add_collection(c: Collection):
    try:
        config = load_config()
        config.add_collection(c)
        config.save()
    except (ConfigException, OSError) as e:
        return to_resp(400, str(e))
    return to_resp(200, "add success")


@app.post("/rm-collection")
async def rm_collection(form: UrlForm):
    try:
        config = load_config()
        config.rm_collection(form.url)
        config.save()
    except (ConfigException, OSError) as e:
        return to_resp(500, str(e))
    return to_resp(200, "rm success")


def serve(host: str = "0.0.0.0", port: int = 3000):
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    serve()
