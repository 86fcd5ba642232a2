import os
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional

import regex as re
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigException
from .name_extractor import NameExtractor
from .subtitle import SubtitleLanguageDetector

logger = logging.getLogger("anime-linker.config")

# 数据目录 (存放 config.yml)
DATA_DIR_ENV = "ANIME_LINKER_DATA"
CONFIG_FILE_NAME = "config.yml"


def get_data_dir() -> Path:
    directory = Path(os.environ.get(DATA_DIR_ENV, "data"))
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"创建数据目录: {directory}")
    return directory


class Proxy(BaseModel):
    scheme: str
    username: Optional[str] = None
    password: Optional[str] = None

    def url(self) -> str:
        """带认证信息的代理地址，供 httpx 使用"""
        if not self.username: return self.scheme
        proto, sep, rest = self.scheme.partition("://")
        if not sep: return self.scheme
        return f"{proto}://{self.username}:{self.password or ''}@{rest}"


class TransmissionConfig(BaseModel):
    type: Literal["transmission"] = "transmission"
    url: str
    user: str = ""
    password: str = ""
    # 下载器侧的下载根目录，实际目录为 <root>/<folder>/
    download_root: str = "/downloads/anime-linker"


class Rule(BaseModel):
    """资源站搜索规则"""
    name: str
    keywords: List[str]
    res_api: Literal["dmhy"] = "dmhy"
    sub_group_id: Optional[int] = None
    sub_group_name: Optional[str] = None
    res_type_id: Optional[int] = None
    res_type_name: Optional[str] = None
    publish_after: Optional[datetime] = None


class MikanItem(BaseModel):
    title: str = ""
    url: str = ""

    def matches(self, title: str, url: str) -> bool:
        """标题留空只比对链接，链接留空只比对标题，否则两者都要相同"""
        if self.title.strip() == "":
            return url.strip() == self.url.strip()
        if self.url.strip() == "":
            return title.strip() == self.title.strip()
        return title.strip() == self.title.strip() and url.strip() == self.url.strip()


class Mikan(BaseModel):
    """蜜柑 RSS 订阅"""
    url: str
    name: str
    extra: List[MikanItem] = Field(default_factory=list)
    skip: List[MikanItem] = Field(default_factory=list)
    title_contain: List[str] = Field(default_factory=list)
    external_subtitle: bool = False
    ep_revise: int = 0
    season: Optional[int] = None

    @field_validator("season")
    @classmethod
    def _check_season(cls, v):
        if v is not None and not 0 < v <= 255:
            raise ValueError(f"season out of range: {v}")
        return v

    def accepts(self, title: str, url: str) -> bool:
        if any(s.matches(title, url) for s in self.skip): return False
        return all(s in title for s in self.title_contain)


class SeasonFolder(BaseModel):
    season: int
    folder: str


class SpecialMapping(BaseModel):
    """
    合集中的特殊文件映射到第 0 季。
    match_and_replace 开启时 file_name 为正则，name 中的 {1} {2} 替换为对应捕获组。
    """
    file_name: str
    name: str
    match_and_replace: bool = False

    @model_validator(mode="after")
    def _check_regex(self):
        if self.match_and_replace:
            try:
                re.compile(self.file_name)
            except re.error as e:
                raise ValueError(f"invalid file_name regex '{self.file_name}': {e}")
        return self

    def matches(self, file_name: str) -> bool:
        if self.match_and_replace:
            return re.search(self.file_name, file_name) is not None
        return self.file_name == file_name

    def link_stem(self, file_name: str) -> str:
        if not self.match_and_replace: return self.name
        match = re.search(self.file_name, file_name)
        if not match: return self.name
        stem = self.name
        for i, cap in enumerate(match.groups(), start=1):
            if cap is not None:
                stem = stem.replace(f"{{{i}}}", cap)
        return stem


class Collection(BaseModel):
    """合集种子"""
    torrent_url: str
    name: str
    title: str
    season_folders: List[SeasonFolder] = Field(default_factory=list)
    special_mappings: List[SpecialMapping] = Field(default_factory=list)
    external_subtitle: bool = False

    def find_mapping(self, file_name: str) -> Optional[SpecialMapping]:
        return next((m for m in self.special_mappings if m.matches(file_name)), None)

    def season_of_folder(self, folder: str) -> Optional[int]:
        return next((sf.season for sf in self.season_folders if sf.folder == folder), None)


class Notify(BaseModel):
    type: Literal["ntfy"] = "ntfy"
    topic: str


class Link(BaseModel):
    enable: bool
    path: str
    dry_run: bool = False
    notify: Optional[Notify] = None


class Config(BaseModel):
    rules: List[Rule] = Field(default_factory=list)
    mikan: List[Mikan] = Field(default_factory=list)
    downloader: TransmissionConfig
    res_api: Literal["dmhy"] = "dmhy"
    proxy: Optional[Proxy] = None
    check_interval: int = 600
    link: Optional[Link] = None
    collections: List[Collection] = Field(default_factory=list)
    # 追加的名字噪声正则 / 字幕语言提示词 (语言代码|||词1,词2)
    name_noise: List[str] = Field(default_factory=list)
    subtitle_hints: List[str] = Field(default_factory=list)

    def proxy_url(self) -> Optional[str]:
        return self.proxy.url() if self.proxy else None

    def apply_hint_tables(self):
        """把配置里的扩展词表装进解析器和字幕判定"""
        NameExtractor.load_extra_noise(self.name_noise)
        SubtitleLanguageDetector.load_extra_hints(self.subtitle_hints)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        path = path or get_data_dir() / CONFIG_FILE_NAME
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigException(f"无法读取配置文件 {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigException(f"配置文件格式错误 {path}: {e}") from e
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigException(f"配置校验失败 {path}: {e}") from e

    def save(self, path: Optional[Path] = None):
        path = path or get_data_dir() / CONFIG_FILE_NAME
        data = self.model_dump(mode="json", exclude_none=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
        logger.info(f"配置已保存: {path}")

    def add_mikan(self, mikan: Mikan):
        """同一 url 的订阅会被替换"""
        for i, m in enumerate(self.mikan):
            if m.url == mikan.url:
                self.mikan[i] = mikan
                return
        self.mikan.append(mikan)

    def rm_mikan(self, url: str):
        for i, m in enumerate(self.mikan):
            if m.url == url:
                del self.mikan[i]
                return
        raise ConfigException(f"mikan with url {url} not found")

    def add_collection(self, collection: Collection):
        for i, c in enumerate(self.collections):
            if c.torrent_url == collection.torrent_url:
                self.collections[i] = collection
                return
        self.collections.append(collection)

    def rm_collection(self, url: str):
        for i, c in enumerate(self.collections):
            if c.torrent_url == url:
                del self.collections[i]
                return
        raise ConfigException(f"collection with torrent url {url} not found")
