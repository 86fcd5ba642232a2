from typing import List, Tuple
from .constants import BRACKET_SPLIT_RE, FALLBACK_SPLIT_RE, PUNCT_RE, BORING_BLOCK_RE, BORING_BLOCK_MAX_LEN


class BlockSplitter:
    @staticmethod
    def normalize(title: str) -> str:
        return title.strip().replace("【", "[").replace("】", "]")

    @staticmethod
    def is_boring(block: str) -> bool:
        """x月新番 这类宣传块，不含结构信息"""
        stripped = PUNCT_RE.sub("", block)
        return bool(BORING_BLOCK_RE.search(stripped)) and len(stripped) <= BORING_BLOCK_MAX_LEN

    @staticmethod
    def split(title: str) -> Tuple[List[str], List[str]]:
        """
        按方括号切块。
        只切出 [字幕组] + 一大块 时，第二块再按空格/连字符切开。
        """
        logs = []
        blocks = [b.strip() for b in BRACKET_SPLIT_RE.split(BlockSplitter.normalize(title)) if b.strip()]

        if len(blocks) == 2:
            rest = [b.strip() for b in FALLBACK_SPLIT_RE.split(blocks[1]) if b.strip()]
            logs.append(f"┣ [Split] 仅两块，按空格/连字符重新切分: {len(rest)} 块")
            blocks = blocks[:1] + rest

        kept = []
        for b in blocks:
            if BlockSplitter.is_boring(b):
                logs.append(f"┣ [Split] 剔除宣传块: {b}")
                continue
            kept.append(b)
        logs.append(f"┣ [Split] 分块结果: {kept}")
        return kept, logs
