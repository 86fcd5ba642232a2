import cn2an
from typing import List, Optional, Tuple
from .constants import SEASON_RE, EPISODE_BLOCK_RE, EPISODE_IN_NAME_RE, CN_MAP
from .exceptions import AmbiguousEpisodeTrailer


def _first_group(match) -> str:
    return next(g for g in match.groups() if g is not None)


class SeasonEpisodeExtractor:
    @staticmethod
    def chinese_to_number(text: str) -> Optional[int]:
        if text in CN_MAP: return CN_MAP[text]
        try:
            return int(cn2an.cn2an(text, mode='smart'))
        except Exception:
            return None

    @staticmethod
    def season_value(raw: str) -> Optional[int]:
        try:
            val = int(raw)
        except ValueError:
            val = SeasonEpisodeExtractor.chinese_to_number(raw)
        # 第0季 / S00 不算季号标记
        if val is None or not 0 < val <= 255: return None
        return val

    @staticmethod
    def extract_season(blocks: List[str]) -> Tuple[Optional[int], List[str], List[str]]:
        """
        在字幕组之后的块里找季号，命中后把季号字样从该块删除，避免污染名字块。
        返回 (季号, 新的块列表, 日志)
        """
        for i in range(1, len(blocks)):
            # 同一块里第一个标记无效 (S00) 时继续看后面的标记
            values = (SeasonEpisodeExtractor.season_value(_first_group(m)) for m in SEASON_RE.finditer(blocks[i]))
            season = next((v for v in values if v is not None), None)
            if season is None: continue
            new_blocks = list(blocks)
            new_blocks[i] = SEASON_RE.sub("", blocks[i])
            return season, new_blocks, [f"┣ [Season] 季号: S{season} (块 #{i}: {blocks[i]})"]
        return None, list(blocks), ["┣ [Season] 未发现季号标记，默认 S1"]

    @staticmethod
    def extract_episode(blocks: List[str], title: str) -> Tuple[Optional[int], Optional[int], List[str], List[str]]:
        """
        返回 (集数, 名字块结束下标, 新的块列表, 日志)。
        独立集数块优先；找不到再去名字块里找。
        """
        for i in range(1, len(blocks)):
            match = EPISODE_BLOCK_RE.fullmatch(blocks[i].strip())
            if match:
                ep = int(_first_group(match))
                return ep, i - 1, list(blocks), [f"┣ [Episode] 独立集数块: {blocks[i]} -> E{ep}"]

        for i in range(1, len(blocks)):
            match = EPISODE_IN_NAME_RE.search(blocks[i])
            if not match: continue
            trailer = blocks[i][match.end():].strip()
            if trailer:
                raise AmbiguousEpisodeTrailer(title, trailer)
            ep = int(_first_group(match))
            new_blocks = list(blocks)
            new_blocks[i] = blocks[i][:match.start()]
            return ep, i, new_blocks, [f"┣ [Episode] 名字块内集数: '{match.group(0).strip()}' -> E{ep}"]

        return None, None, list(blocks), ["┣ [Episode] 未发现集数"]
