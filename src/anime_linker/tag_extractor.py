from typing import List, Optional, Tuple
from .constants import SUB_RE, SUB_NOISE_RE, RESOLUTION_RE, SOURCE_RE


class TagExtractor:
    @staticmethod
    def tokens(blocks: List[str]) -> List[str]:
        """名字块之后的所有块按空格再切一次，得到平铺的标签序列"""
        return [t.strip() for b in blocks for t in b.split(" ") if t.strip()]

    @staticmethod
    def extract(tokens: List[str]) -> Tuple[Optional[str], Optional[str], Optional[str], List[str]]:
        """
        字幕 / 分辨率 / 来源 三类各取第一个命中的标签。
        同一个标签可以同时命中多类。
        """
        sub, resolution, source = None, None, None
        for tok in tokens:
            if sub is None and SUB_RE.search(tok):
                sub = SUB_NOISE_RE.sub("", tok)
            if resolution is None and RESOLUTION_RE.search(tok):
                resolution = tok
            if source is None and SOURCE_RE.search(tok):
                source = tok

        logs = [f"┣ [Tag] 标签序列: {tokens}"]
        if sub: logs.append(f"┣ [Tag] 字幕: {sub}")
        if resolution: logs.append(f"┣ [Tag] 分辨率: {resolution}")
        if source: logs.append(f"┣ [Tag] 来源: {source}")
        return sub, resolution, source, logs
