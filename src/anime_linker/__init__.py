from .kernel import parse
from .data_models import Episode, RegularEpisode, SpecialEpisode
from .block_splitter import BlockSplitter
from .season_episode import SeasonEpisodeExtractor
from .name_extractor import NameExtractor
from .tag_extractor import TagExtractor
from .subtitle import SubtitleLanguageDetector

__all__ = [
    "parse",
    "Episode",
    "RegularEpisode",
    "SpecialEpisode",
    "BlockSplitter",
    "SeasonEpisodeExtractor",
    "NameExtractor",
    "TagExtractor",
    "SubtitleLanguageDetector",
]
