import logging
from typing import List, Optional

from .data_models import Episode, RegularEpisode, SpecialEpisode
from .block_splitter import BlockSplitter
from .season_episode import SeasonEpisodeExtractor
from .name_extractor import NameExtractor
from .tag_extractor import TagExtractor
from .exceptions import MissingNameBlock

logger = logging.getLogger("anime-linker.kernel")


class LoggerStub:
    """
    把解析过程写进一个 list，接口对应的审计日志。
    同时转发给 logging，方便命令行下以 DEBUG 级别观察。
    """
    def __init__(self, logs: List[str]):
        self.logs = logs

    def log(self, message: str):
        self.logs.append(message)
        logger.debug(message)

    def debug_out(self, section: str, msgs: List[str]):
        self.log(f"┃ [DEBUG][{section}]: 启动子流程审计")
        if not msgs:
            self.log(f"┣ ⏩ 该步骤未产生关键动作")
        else:
            for m in msgs: self.log(m)
        self.log(f"┗ ✅ 流程结束")


def parse(title: str, current_logs: Optional[List[str]] = None) -> Episode:
    """
    解析一条发布标题。
    纯函数，无 I/O；找不到集数时返回 SpecialEpisode，
    找到了集数但后续信息不可信时抛出 TitleParseError。
    """
    stub = LoggerStub(current_logs if current_logs is not None else [])
    stub.log(f"🚀 --- [标题解析] {title} ---")

    # --- STEP 1: 分块 ---
    blocks, split_logs = BlockSplitter.split(title)
    stub.debug_out("STEP 1: 分块", split_logs)
    if len(blocks) < 2:
        stub.log("┗ 块数不足，按特殊标题处理")
        return SpecialEpisode(raw_title=title.strip())
    sub_group = blocks[0]

    # --- STEP 2: 季号 ---
    season, blocks, season_logs = SeasonEpisodeExtractor.extract_season(blocks)
    stub.debug_out("STEP 2: 季号", season_logs)

    # --- STEP 3: 集数 ---
    episode, name_end, blocks, ep_logs = SeasonEpisodeExtractor.extract_episode(blocks, title)
    stub.debug_out("STEP 3: 集数", ep_logs)
    if episode is None:
        stub.log("┗ 未找到集数，按特殊标题处理")
        return SpecialEpisode(raw_title=title.strip())
    if name_end is None or name_end < 1:
        raise MissingNameBlock(title)

    # --- STEP 4: 名字 ---
    name_block = " ".join(blocks[1:name_end + 1])
    name_en, name_zh, name_jp, name_logs = NameExtractor.extract(name_block)
    stub.debug_out("STEP 4: 名字", name_logs)
    if not (name_en or name_zh or name_jp):
        raise MissingNameBlock(title, "no name found in name block")

    # --- STEP 5: 标签 ---
    sub_tag, resolution, source, tag_logs = TagExtractor.extract(TagExtractor.tokens(blocks[name_end + 1:]))
    stub.debug_out("STEP 5: 标签", tag_logs)

    result = RegularEpisode(
        sub_group=sub_group,
        episode=episode,
        season=season if season is not None else 1,
        name_en=name_en,
        name_zh=name_zh,
        name_jp=name_jp,
        sub_tag=sub_tag,
        resolution=resolution,
        source=source,
    )
    stub.log(f"┗ 解析完成: {result}")
    return result
