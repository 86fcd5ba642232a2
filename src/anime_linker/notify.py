import httpx
import logging
from typing import Optional
from .config import Notify

logger = logging.getLogger("anime-linker.notify")

NTFY_BASE_URL = "https://ntfy.sh"


class Notifier:
    """链接成功后的推送 (ntfy)"""

    def __init__(self, config: Notify, proxy: Optional[str] = None, base_url: str = NTFY_BASE_URL):
        self.config = config
        self.proxy = proxy
        self.base_url = base_url

    async def link_success(self, file_stem: str):
        url = f"{self.base_url}/{self.config.topic}"
        async with httpx.AsyncClient(timeout=15, proxy=self.proxy) as client:
            try:
                resp = await client.post(url, content=f"已下载<{file_stem}>".encode("utf-8"))
            except httpx.HTTPError as e:
                logger.error(f"推送失败: {e}")
                return
        if resp.status_code >= 400:
            logger.error(f"推送失败: ntfy HTTP {resp.status_code}")
