from .constants import Lang, JP_RE, ZH_RE, EN_RE


def classify(text: str) -> Lang:
    """
    按文字区段判定片段语言。
    日文判定必须先于中文，日文名里经常夹着汉字。
    """
    if JP_RE.search(text): return Lang.JP
    if ZH_RE.search(text): return Lang.ZH
    if EN_RE.search(text): return Lang.EN
    return Lang.OTHER
