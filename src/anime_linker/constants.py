import regex as re
from enum import Enum

class Lang(Enum):
    EN = "en"
    ZH = "zh"
    JP = "jp"
    OTHER = "other"

# 0. 文件类型
VIDEO_EXTS = ("mp4", "mkv")
SUBTITLE_EXTS = ("srt", "ass")

# 1. 语言判定 (顺序: 日 -> 中 -> 英, 日文里常夹带汉字)
JP_RE = re.compile(r"[\u3040-\u309f\u30a0-\u30ff]{2,}")
ZH_RE = re.compile(r"[\u4e00-\u9fa5]{2,}")
EN_RE = re.compile(r"[a-zA-Z]{2,}")

# 2. 分块
BRACKET_SPLIT_RE = re.compile(r"[\[\]]")
FALLBACK_SPLIT_RE = re.compile(r"[ -]")
# 除字母数字下划线、空白、汉字、假名、连字符以外的所有字符
PUNCT_RE = re.compile(r"[^\w\s\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff-]")
# x月新番 之类的宣传块
BORING_BLOCK_RE = re.compile(r"新番|月番")
BORING_BLOCK_MAX_LEN = 11

# 3. 季集匹配
SEASON_RE = re.compile(r"S(\d{1,2})|Season (\d{1,2})|[第 ](.)(?:部分|[季期部])")
# 独立集数块: 01 / 01v2 / 第01话 / 12END
EPISODE_BLOCK_RE = re.compile(r"(\d+)|(\d+).?[vV](\d)|第?(\d+)[话話集]|(\d+).?END")
# 名字块中的集数: " - 09" / " 第05话" / " EP33" (可带版本号)
EPISODE_IN_NAME_RE = re.compile(r" -? ?(?:(\d+)|第(\d+)[话話集]|[Ee][Pp]?(\d+))(?:.?[vV](\d))?")

CN_MAP = {'一': 1, '二': 2, '三': 3, '四': 4, '五': 5, '六': 6, '七': 7, '八': 8, '九': 9, '十': 10}

# 4. 名字块
NAME_SPLIT_RE = re.compile(r"/|\s{2}|-\s{2}")
# 去除仅限港澳台字样 (仅限港澳台地区 / 僅限港澳台地區)
NAME_NOISE_PATTERNS = [
    r"[(（][仅僅]限港澳台地[区區][）)]",
]

# 5. 标签
SUB_RE = re.compile(r"[简繁日字幕]|CH|BIG5|GB")
SUB_NOISE_RE = re.compile(r"_MP4|_MKV")
RESOLUTION_RE = re.compile(r"1080|720|2160|4K")
SOURCE_RE = re.compile(r"B-Global|[Bb]aha|[Bb]ilibili|AT-X|Web")

# 6. 外挂字幕
SUBTITLE_SUFFIX_RE = re.compile(r"[._](.*)")
SUBTITLE_SUFFIX_MAP = {
    "tc": "zh-HK", "zh-hant": "zh-HK",
    "sc": "zh", "zh-hans": "zh", "": "zh",
    "ja": "ja",
}
# 文件名中的语言提示词 (简体化后匹配)
SUBTITLE_HINTS = [
    ("zh", ["简中"]),
    ("zh-HK", ["繁中"]),
    ("ja", ["日文", "日语", "日本语"]),
]

# 7. 资源
MAGNET_HASH_RE = re.compile(r"xt=urn:(sha1|btih|ed2k|aich|kzhash|md5|tree:tiger):([A-Za-z0-9]+)")
COLLECTION_KEYWORD = "合集"
