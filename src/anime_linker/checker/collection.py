import logging
from pathlib import PurePosixPath
from typing import List, Optional

from .common import add_by_meta, find_server_torrent, link_video
from ..config import Collection, Link
from ..data_models import SpecialEpisode
from ..exceptions import AnimeLinkerException, TorrentReadException
from ..kernel import parse
from ..notify import Notifier
from ..providers.http import fetch_bytes
from ..providers.transmission.client import ServerTorrent
from ..torrent import read_torrent

logger = logging.getLogger("anime-linker.checker.collection")


async def check_collection(collection: Collection, client, server_torrents: List[ServerTorrent],
                           added_hashes: List[str], link: Optional[Link] = None,
                           proxy: Optional[str] = None, notifier: Optional[Notifier] = None):
    """
    合集种子: 下载完成后逐个视频文件链接。
    命中特殊映射的文件放入第 0 季，其余文件按所在目录对应的季号解析。
    """
    data = await fetch_bytes(collection.torrent_url, proxy)
    meta = read_torrent(data)
    if not meta.is_multi_file:
        raise TorrentReadException(f"不是多文件种子: {collection.title}")

    server = find_server_torrent(server_torrents, meta.info_hash)
    if server is None:
        await add_by_meta(client, data, meta, collection.name, collection.title, added_hashes)
        return
    if not (link and link.enable and server.is_complete):
        return

    for video in meta.video_files():
        mapping = collection.find_mapping(video.name)
        if mapping is not None:
            stem = mapping.link_stem(video.name)
            await link_video(SpecialEpisode(raw_title=stem), collection.name, meta, video, server, link,
                             collection.external_subtitle, notifier, stem=stem)
            continue

        # 种子根目录下的文件对应空目录名
        parent = "" if video.parent == PurePosixPath(".") else str(video.parent)
        season = collection.season_of_folder(parent)
        if season is None:
            continue
        try:
            ep = parse(video.name).with_season(season)
            await link_video(ep, collection.name, meta, video, server, link, collection.external_subtitle, notifier,
                             folder_season=season)
        except AnimeLinkerException as e:
            logger.warning(f"{video.name} 解析失败: {e}")
