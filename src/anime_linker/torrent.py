import io
import os
import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List

import torf

from .constants import VIDEO_EXTS
from .exceptions import TorrentReadException

logger = logging.getLogger("anime-linker.torrent")


@dataclass
class TorrentMeta:
    name: str
    info_hash: str
    # 相对种子根目录的路径；单文件种子只有一个文件，即 name 本身
    files: List[PurePosixPath] = field(default_factory=list)
    is_multi_file: bool = False

    def video_files(self) -> List[PurePosixPath]:
        return [f for f in self.files if f.suffix[1:] in VIDEO_EXTS]

    def storage_path(self, file: PurePosixPath) -> str:
        """文件在下载目录中的相对位置"""
        if self.is_multi_file:
            return f"{self.name}/{file}"
        return str(file)


def read_torrent(data: bytes) -> TorrentMeta:
    try:
        t = torf.Torrent.read_stream(io.BytesIO(data), validate=False)
        name = t.name
        info_hash = t.infohash.lower()
        is_multi = t.mode == "multifile"
        files = []
        for f in t.files:
            path = PurePosixPath(os.fspath(f))
            # torf 的多文件路径包含根目录
            if is_multi and path.parts and path.parts[0] == name:
                path = PurePosixPath(*path.parts[1:])
            files.append(path)
    except torf.TorfError as e:
        raise TorrentReadException(f"无法解析种子: {e}") from e
    if not name:
        raise TorrentReadException("种子缺少 name 字段")
    return TorrentMeta(name=name, info_hash=info_hash, files=files, is_multi_file=is_multi)
