import base64
import logging
from dataclasses import replace
from pathlib import PurePosixPath
from typing import List, Optional

from ..config import Link
from ..data_models import Episode, library_path
from ..linker import episode_target, link_episode_video, link_external_subtitles
from ..notify import Notifier
from ..providers.transmission.client import ServerTorrent
from ..torrent import TorrentMeta

logger = logging.getLogger("anime-linker.checker")


def find_server_torrent(server_torrents: List[ServerTorrent], info_hash: str) -> Optional[ServerTorrent]:
    return next((t for t in server_torrents if t.hash == info_hash), None)


async def add_by_meta(client, data: bytes, meta: TorrentMeta, folder: str, title: str, added_hashes: List[str]):
    """本轮已加入过的种子不再重复提交"""
    if meta.info_hash in added_hashes:
        logger.info(f"{title} 刚刚已经被加入下载了")
        return
    await client.torrent_add_by_meta(base64.b64encode(data).decode("ascii"), folder)
    added_hashes.append(meta.info_hash)
    logger.info(f"加入下载列表: {title}")


async def link_video(ep: Episode, name: str, meta: TorrentMeta, video: PurePosixPath, server: ServerTorrent,
                     link: Link, external_subtitle: bool, notifier: Optional[Notifier] = None,
                     stem: Optional[str] = None, folder_season: Optional[int] = None):
    """
    链接单个视频 (可选外挂字幕)。
    stem 为空时由剧集记录生成文件名；folder_season 指定时放入该季目录。
    """
    target = episode_target(link.path, ep, name, video.suffix[1:])
    if stem is not None:
        target = replace(target, stem=stem)
    if folder_season is not None:
        target = replace(target, folder=f"{link.path}/{library_path(name, folder_season)}")
    if link_episode_video(target, server.download_dir, meta, video, link.dry_run) and notifier:
        await notifier.link_success(target.stem)
    if external_subtitle and meta.is_multi_file:
        link_external_subtitles(target, server.download_dir, meta, video.stem, link.dry_run)
