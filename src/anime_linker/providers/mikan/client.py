import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import feedparser

from ..http import fetch_bytes, fetch_text

logger = logging.getLogger("anime-linker.mikan")


@dataclass
class FeedItem:
    title: str
    url: str
    data: bytes


def parse_feed(rss_text: str) -> List[Tuple[str, str]]:
    """解析蜜柑 RSS，返回 (标题, 种子链接)；没有 enclosure 的条目忽略"""
    feed = feedparser.parse(rss_text)
    if feed.bozo:
        logger.warning(f"RSS 格式可能有误: {feed.bozo_exception}")
    items = []
    for entry in feed.entries:
        enclosures = entry.get("enclosures") or []
        url = next((e.get("href") for e in enclosures if e.get("href")), None)
        if not url:
            logger.debug(f"条目缺少种子链接: {entry.get('title')}")
            continue
        items.append((entry.get("title", "").strip(), url))
    return items


class MikanProvider:
    def __init__(self, proxy: Optional[str] = None):
        self.proxy = proxy

    async def _download(self, title: str, url: str) -> Optional[FeedItem]:
        try:
            return FeedItem(title=title, url=url, data=await fetch_bytes(url, self.proxy))
        except Exception as e:
            logger.error(f"种子下载失败 {title}: {e}")
            return None

    async def items(self, feed_url: str) -> List[FeedItem]:
        """拉取 RSS 并并发下载所有种子"""
        entries = parse_feed(await fetch_text(feed_url, self.proxy))
        results = await asyncio.gather(*(self._download(t, u) for t, u in entries))
        return [r for r in results if r is not None]

    async def item(self, title: str, url: str) -> FeedItem:
        """配置中手动追加的条目，下载失败直接抛出"""
        return FeedItem(title=title, url=url, data=await fetch_bytes(url, self.proxy))
