from pathlib import PurePosixPath

import pytest
import torf

from anime_linker.exceptions import TorrentReadException
from anime_linker.torrent import read_torrent


def _make_torrent(path) -> torf.Torrent:
    t = torf.Torrent(path=str(path), trackers=["http://tracker.example/announce"])
    t.generate()
    return t


def test_single_file_torrent(tmp_path):
    video = tmp_path / "[G] Show - 01 [1080p].mkv"
    video.write_bytes(b"0" * 4096)
    t = _make_torrent(video)

    meta = read_torrent(t.dump())
    assert meta.name == "[G] Show - 01 [1080p].mkv"
    assert meta.info_hash == t.infohash.lower()
    assert not meta.is_multi_file
    assert meta.files == [PurePosixPath("[G] Show - 01 [1080p].mkv")]
    assert meta.storage_path(meta.files[0]) == "[G] Show - 01 [1080p].mkv"


def test_multi_file_paths_are_relative_to_root(tmp_path):
    root = tmp_path / "Show Pack"
    (root / "S2").mkdir(parents=True)
    (root / "S1.mkv").write_bytes(b"1" * 2048)
    (root / "S2" / "E01.mp4").write_bytes(b"2" * 2048)
    (root / "S2" / "E01.ass").write_bytes(b"3" * 128)
    t = _make_torrent(root)

    meta = read_torrent(t.dump())
    assert meta.name == "Show Pack"
    assert meta.is_multi_file
    assert sorted(map(str, meta.files)) == ["S1.mkv", "S2/E01.ass", "S2/E01.mp4"]
    assert sorted(map(str, meta.video_files())) == ["S1.mkv", "S2/E01.mp4"]
    assert meta.storage_path(PurePosixPath("S2/E01.mp4")) == "Show Pack/S2/E01.mp4"


def test_invalid_torrent():
    with pytest.raises(TorrentReadException):
        read_torrent(b"definitely not bencode")
