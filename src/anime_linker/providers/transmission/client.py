import httpx
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...config import TransmissionConfig
from ...exceptions import DownloaderException

logger = logging.getLogger("anime-linker.transmission")

SESSION_HEADER = "X-Transmission-Session-Id"
TORRENT_FIELDS = ["id", "hashString", "name", "downloadDir", "percentDone"]


@dataclass
class ServerTorrent:
    """下载器中已有的种子"""
    id: int
    hash: str
    name: str
    download_dir: str
    percent_done: float

    @property
    def is_complete(self) -> bool:
        return self.percent_done >= 1.0


class TransmissionClient:
    """
    Transmission RPC 客户端
    首次请求会收到 409，携带返回的 Session-Id 重试
    """

    def __init__(self, config: TransmissionConfig, timeout: float = 30,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.timeout = timeout
        self.transport = transport
        self.session_id: Optional[str] = None

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if not self.config.user: return None
        return httpx.BasicAuth(self.config.user, self.config.password)

    def download_dir(self, folder: str) -> str:
        return f"{self.config.download_root.rstrip('/')}/{folder}/"

    async def _call(self, method: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        payload = {"method": method, "arguments": arguments}
        async with httpx.AsyncClient(timeout=self.timeout, auth=self._auth(), transport=self.transport) as client:
            try:
                for _ in range(2):
                    headers = {SESSION_HEADER: self.session_id} if self.session_id else {}
                    resp = await client.post(self.config.url, json=payload, headers=headers)
                    if resp.status_code == 409:
                        self.session_id = resp.headers.get(SESSION_HEADER)
                        logger.debug(f"获取 Transmission Session-Id: {self.session_id}")
                        continue
                    break
            except httpx.HTTPError as e:
                raise DownloaderException(f"Transmission Network Error: {e}") from e

        if resp.status_code != 200:
            raise DownloaderException(f"Transmission HTTP {resp.status_code} ({method})", resp.status_code)
        data = resp.json()
        if data.get("result") != "success":
            raise DownloaderException(f"Transmission {method} failed: {data.get('result')}")
        return data.get("arguments", {})

    async def torrent_get(self) -> List[ServerTorrent]:
        args = await self._call("torrent-get", {"fields": TORRENT_FIELDS})
        return [
            ServerTorrent(
                id=t["id"],
                hash=t["hashString"].lower(),
                name=t["name"],
                download_dir=t["downloadDir"],
                percent_done=float(t["percentDone"]),
            )
            for t in args.get("torrents", [])
        ]

    async def torrent_add(self, magnet: str, folder: str):
        await self._call("torrent-add", {"filename": magnet, "download-dir": self.download_dir(folder)})

    async def torrent_add_by_meta(self, meta: str, folder: str):
        """meta 为 base64 编码的种子文件"""
        await self._call("torrent-add", {
            "metainfo": meta,
            "download-dir": self.download_dir(folder),
            "paused": False,
        })
