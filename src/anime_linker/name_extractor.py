import regex as re
from typing import List, Optional, Tuple
from .constants import Lang, NAME_SPLIT_RE, NAME_NOISE_PATTERNS
from .lang_classifier import classify


class NameExtractor:
    """
    从名字块中拆出 英/中/日 三种名字。
    分隔符没有统一规范，按 / 或双空格 -> _ -> ' - ' -> 单空格(同语言合并) 的顺序依次尝试。
    """

    # 运行时追加的名字噪声 (如新的地区限定字样)
    _extra_noise: List[str] = []

    @classmethod
    def load_extra_noise(cls, patterns: List[str]):
        """追加名字噪声正则，空行与 # 开头的行忽略"""
        parsed = []
        for p in patterns:
            p = p.strip()
            if not p or p.startswith("#"): continue
            try:
                re.compile(p)
            except re.error:
                continue
            parsed.append(p)
        cls._extra_noise = parsed

    @classmethod
    def strip_noise(cls, name: str) -> str:
        name = name.strip()
        for p in NAME_NOISE_PATTERNS + cls._extra_noise:
            name = re.sub(p, "", name)
        return name

    @staticmethod
    def coalesce_by_lang(text: str) -> List[str]:
        """按单空格切开，相邻同语言的词合并 (Summer Time Rendering 不会被拆成三段)"""
        merged: List[str] = []
        for item in text.split(" "):
            if merged and classify(merged[-1]) == classify(item):
                merged[-1] = f"{merged[-1]} {item}"
            else:
                merged.append(item)
        return merged

    @classmethod
    def split_fragments(cls, name: str) -> List[str]:
        cleaned = cls.strip_noise(name)
        parts = [p for p in NAME_SPLIT_RE.split(cleaned) if p.strip()]
        if len(parts) == 1:
            if "_" in cleaned:
                parts = cleaned.split("_")
            elif " - " in cleaned:
                parts = cleaned.split(" - ")
        if len(parts) == 1:
            parts = cls.coalesce_by_lang(parts[0])
        return parts

    @classmethod
    def extract(cls, name_block: str) -> Tuple[Optional[str], Optional[str], Optional[str], List[str]]:
        """返回 (name_en, name_zh, name_jp, 日志)，每种语言取第一个片段"""
        found = {}
        fragments = cls.split_fragments(name_block)
        for frag in fragments:
            lang = classify(frag)
            if lang == Lang.OTHER or lang in found: continue
            found[lang] = frag.strip()
        logs = [f"┣ [Name] 名字块: '{name_block}' -> 片段 {fragments}"]
        for lang, val in found.items():
            logs.append(f"┣ [Name] {lang.value}: {val}")
        return found.get(Lang.EN), found.get(Lang.ZH), found.get(Lang.JP), logs
