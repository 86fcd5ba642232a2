"""
自定义异常类
"""
from typing import Optional


class AnimeLinkerException(Exception):
    """基础异常类"""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or "UNKNOWN_ERROR"
        super().__init__(self.message)


class TitleParseError(AnimeLinkerException):
    """标题解析失败"""

    def __init__(self, message: str, title: str, code: str = "PARSE_ERROR"):
        self.title = title
        super().__init__(f"{message}: {title}", code)


class AmbiguousEpisodeTrailer(TitleParseError):
    """名字块中的集数后面还有无法理解的内容"""

    def __init__(self, title: str, trailer: str):
        self.trailer = trailer
        super().__init__(f"can't understand episode number (trailing '{trailer}')", title, "AMBIGUOUS_EPISODE")


class MissingNameBlock(TitleParseError):
    """找到了集数但定位不到名字块"""

    def __init__(self, title: str, reason: str = "can't find name block"):
        super().__init__(reason, title, "MISSING_NAME_BLOCK")


class NoNameAvailable(AnimeLinkerException):
    def __init__(self):
        super().__init__("try to format path but all name is none", "NO_NAME")


class InvalidEpisodeNumber(AnimeLinkerException):
    def __init__(self, episode: int):
        self.episode = episode
        super().__init__(f"episode number must not be negative: {episode}", "INVALID_EPISODE")


class ConfigException(AnimeLinkerException):
    """配置异常"""

    def __init__(self, message: str):
        super().__init__(message, "CONFIG_ERROR")


class DownloaderException(AnimeLinkerException):
    """下载器 RPC 异常"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        code = f"DOWNLOADER_ERROR_{status_code}" if status_code else "DOWNLOADER_ERROR"
        super().__init__(message, code)


class TorrentReadException(AnimeLinkerException):
    def __init__(self, message: str):
        super().__init__(message, "TORRENT_ERROR")


class ResourceApiException(AnimeLinkerException):
    """资源站 / 磁力链接异常"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        code = f"RESOURCE_ERROR_{status_code}" if status_code else "RESOURCE_ERROR"
        super().__init__(message, code)
