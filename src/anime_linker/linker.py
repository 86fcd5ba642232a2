import os
import logging
from dataclasses import dataclass
from typing import List

from .data_models import Episode
from .subtitle import SubtitleLanguageDetector, is_subtitle
from .torrent import TorrentMeta

logger = logging.getLogger("anime-linker.linker")


@dataclass(frozen=True)
class LinkTarget:
    """媒体库中的链接位置: <folder>/<stem>.<ext>"""
    folder: str
    stem: str
    ext: str

    @property
    def path(self) -> str:
        return f"{self.folder}/{self.stem}.{self.ext}"

    def subtitle_path(self, lang: str, ext: str) -> str:
        return f"{self.folder}/{self.stem}.{lang}.{ext}"


def episode_target(library_root: str, ep: Episode, name: str, ext: str) -> LinkTarget:
    return LinkTarget(
        folder=f"{library_root}/{ep.library_path(name)}",
        stem=ep.library_file_stem(name),
        ext=ext,
    )


def link_file(original: str, link: str, dry_run: bool = False) -> bool:
    """
    创建硬链接。
    链接已存在时跳过；dry_run 只打印计划。
    只有真正创建了链接才返回 True。
    """
    if os.path.exists(link):
        return False
    if dry_run:
        logger.info(f"准备链接 {link} <- {original}")
        return False
    try:
        os.makedirs(os.path.dirname(link) or ".", exist_ok=True)
        os.link(original, link)
    except OSError as e:
        logger.error(f"硬链接失败: {e} 当 {link} <- {original}")
        return False
    logger.info(f"创建链接 {link} <- {original}")
    return True


def link_episode_video(target: LinkTarget, download_dir: str, meta: TorrentMeta, video, dry_run: bool = False) -> bool:
    original = f"{download_dir.rstrip('/')}/{meta.storage_path(video)}"
    return link_file(original, target.path, dry_run)


def link_external_subtitles(target: LinkTarget, download_dir: str, meta: TorrentMeta, video_stem: str,
                            dry_run: bool = False) -> List[str]:
    """把种子内能判定语言的外挂字幕链接到视频旁边，返回新建的链接"""
    created = []
    for f in meta.files:
        if not is_subtitle(f.name): continue
        lang = SubtitleLanguageDetector.detect(f.name, video_stem)
        if lang is None:
            logger.debug(f"无法判定字幕语言，跳过: {f}")
            continue
        link = target.subtitle_path(lang, f.suffix[1:])
        original = f"{download_dir.rstrip('/')}/{meta.storage_path(f)}"
        if link_file(original, link, dry_run):
            created.append(link)
    return created
