import zhconv
from typing import List, Optional, Tuple
from .constants import SUBTITLE_EXTS, SUBTITLE_SUFFIX_RE, SUBTITLE_SUFFIX_MAP, SUBTITLE_HINTS


def is_subtitle(file_name: str) -> bool:
    return file_name.rsplit(".", 1)[-1].lower() in SUBTITLE_EXTS


class SubtitleLanguageDetector:
    """
    外挂字幕语言判定。
    与视频同名前缀的字幕看后缀 (xxx.tc.ass / xxx_sc.srt)，
    否则在简体化后的文件名里找提示词 (简中 / 繁中 / 日文)。
    """

    # 运行时追加的提示词，优先于内置表
    _extra_hints: List[Tuple[str, List[str]]] = []

    @classmethod
    def load_extra_hints(cls, rules: List[str]):
        """
        加载额外提示词，格式: 语言代码|||提示词1,提示词2
        示例: zh|||简体,简日
        """
        parsed = []
        for line in rules:
            line = line.strip()
            if not line or line.startswith("#"): continue
            parts = line.split("|||")
            if len(parts) != 2: continue
            lang = parts[0].strip()
            words = [zhconv.convert(w.strip(), "zh-hans") for w in parts[1].split(",") if w.strip()]
            if lang and words:
                parsed.append((lang, words))
        cls._extra_hints = parsed

    @staticmethod
    def from_suffix(file_name: str, video_stem: str) -> Optional[str]:
        ext = file_name.rsplit(".", 1)[-1]
        block = file_name.replace(video_stem, "", 1)
        if block.endswith(f".{ext}"):
            block = block[:-len(ext) - 1]
        match = SUBTITLE_SUFFIX_RE.search(block.lower())
        if not match: return None
        code = match.group(1)
        return SUBTITLE_SUFFIX_MAP.get(code, code)

    @classmethod
    def from_hints(cls, file_name: str) -> Optional[str]:
        simplified = zhconv.convert(file_name, "zh-hans")
        for lang, words in cls._extra_hints + SUBTITLE_HINTS:
            if any(w in simplified for w in words):
                return lang
        return None

    @classmethod
    def detect(cls, file_name: str, video_stem: str) -> Optional[str]:
        """返回语言代码，无法判定时返回 None (该字幕不链接)"""
        if file_name.startswith(video_stem):
            return cls.from_suffix(file_name, video_stem)
        return cls.from_hints(file_name)
