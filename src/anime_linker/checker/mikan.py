import logging
from typing import List, Optional

from .common import add_by_meta, find_server_torrent, link_video
from ..config import Link, Mikan
from ..constants import COLLECTION_KEYWORD
from ..data_models import Episode
from ..exceptions import InvalidEpisodeNumber, TitleParseError
from ..kernel import parse
from ..notify import Notifier
from ..providers.mikan.client import FeedItem, MikanProvider
from ..providers.transmission.client import ServerTorrent
from ..torrent import read_torrent

logger = logging.getLogger("anime-linker.checker.mikan")


def process_title(title: str, mikan: Mikan) -> Episode:
    """解析订阅条目标题并应用集数修正与季号覆盖"""
    ep = parse(title).with_episode_offset(mikan.ep_revise)
    if mikan.season is not None:
        ep = ep.with_season(mikan.season)
    return ep


async def collect_items(mikan: Mikan, provider: MikanProvider) -> List[FeedItem]:
    items = [i for i in await provider.items(mikan.url) if mikan.accepts(i.title, i.url)]
    for extra in mikan.extra:
        items.append(await provider.item(extra.title, extra.url))
    return items


async def check_mikan(mikan: Mikan, client, server_torrents: List[ServerTorrent], added_hashes: List[str],
                      link: Optional[Link] = None, provider: Optional[MikanProvider] = None,
                      notifier: Optional[Notifier] = None):
    provider = provider or MikanProvider()
    for item in await collect_items(mikan, provider):
        if COLLECTION_KEYWORD in item.title:
            logger.debug(f"跳过合集: {item.title}")
            continue

        meta = read_torrent(item.data)
        videos = meta.video_files()
        if len(videos) > 1:
            logger.info(f"跳过多个视频文件的多文件种子: {item.title}")
            continue
        if not videos:
            logger.info(f"跳过没有视频文件的种子: {item.title}")
            continue
        video = videos[0]

        server = find_server_torrent(server_torrents, meta.info_hash)
        if server is None:
            await add_by_meta(client, item.data, meta, mikan.name, item.title, added_hashes)
            continue

        if not (link and link.enable and (server.is_complete or link.dry_run)):
            continue
        try:
            ep = process_title(item.title, mikan)
            await link_video(ep, ep.display_name(mikan.name), meta, video, server, link,
                             mikan.external_subtitle, notifier)
        except (TitleParseError, InvalidEpisodeNumber) as e:
            logger.warning(f"解析'{item.title}'失败: {e}")
