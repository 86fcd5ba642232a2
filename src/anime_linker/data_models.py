from typing import Optional, Union
from dataclasses import dataclass, replace
from .constants import VIDEO_EXTS
from .exceptions import NoNameAvailable, InvalidEpisodeNumber


def library_path(name: str, season: int) -> str:
    return f"{name}/Season {season:02}"


def library_file_stem(name: str, season: int, episode: int) -> str:
    if episode < 0: raise InvalidEpisodeNumber(episode)
    return f"{name} S{season:02}E{episode}"


def remove_video_ext(name: str) -> str:
    lower = name.lower()
    for ext in VIDEO_EXTS:
        if lower.endswith(f".{ext}"):
            return name[:-len(ext) - 1]
    return name


@dataclass(frozen=True)
class RegularEpisode:
    sub_group: str
    episode: int
    season: int = 1
    name_en: Optional[str] = None
    name_zh: Optional[str] = None
    name_jp: Optional[str] = None
    sub_tag: Optional[str] = None
    resolution: Optional[str] = None
    source: Optional[str] = None

    def display_name(self, override: Optional[str] = None) -> str:
        """优先级: 指定名 > 中文 > 日文 > 英文"""
        if override is not None: return override
        for name in (self.name_zh, self.name_jp, self.name_en):
            if name: return name
        raise NoNameAvailable()

    def library_path(self, name: str) -> str:
        return library_path(name, self.season)

    def library_file_stem(self, name: str) -> str:
        return library_file_stem(name, self.season, self.episode)

    def with_season(self, season: int) -> "RegularEpisode":
        return replace(self, season=season)

    def with_episode_offset(self, delta: int) -> "RegularEpisode":
        return replace(self, episode=self.episode + delta)


@dataclass(frozen=True)
class SpecialEpisode:
    """未能定位集数的标题，原样保留等待人工处理"""
    raw_title: str

    def display_name(self, override: Optional[str] = None) -> str:
        return override if override is not None else self.raw_title

    def library_path(self, name: str) -> str:
        return library_path(name, 0)

    def library_file_stem(self, name: str) -> str:
        return remove_video_ext(self.raw_title)

    def with_season(self, season: int) -> "SpecialEpisode":
        return self

    def with_episode_offset(self, delta: int) -> "SpecialEpisode":
        return self


Episode = Union[RegularEpisode, SpecialEpisode]
