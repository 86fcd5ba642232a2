import httpx
import logging
from typing import Optional
from ..exceptions import ResourceApiException

logger = logging.getLogger("anime-linker.http")

USER_AGENT = "anime-linker/1.0"


async def fetch(url: str, proxy: Optional[str] = None, timeout: float = 30) -> httpx.Response:
    """GET 请求，非 2xx 或网络错误统一转为 ResourceApiException"""
    logger.debug(f"☁️ GET {url}")
    async with httpx.AsyncClient(timeout=timeout, proxy=proxy, follow_redirects=True,
                                 headers={"User-Agent": USER_AGENT}) as client:
        try:
            resp = await client.get(url)
        except httpx.HTTPError as e:
            raise ResourceApiException(f"Network Error: {url}: {e}") from e
    if resp.status_code >= 400:
        raise ResourceApiException(f"HTTP {resp.status_code}: {url}", resp.status_code)
    return resp


async def fetch_bytes(url: str, proxy: Optional[str] = None) -> bytes:
    return (await fetch(url, proxy)).content


async def fetch_text(url: str, proxy: Optional[str] = None) -> str:
    return (await fetch(url, proxy)).text
