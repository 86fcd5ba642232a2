import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode

from bs4 import BeautifulSoup

from ..http import fetch_text
from ...constants import MAGNET_HASH_RE
from ...exceptions import ResourceApiException

logger = logging.getLogger("anime-linker.dmhy")

UNKNOWN_SUB_GROUP_ID = -1
UNKNOWN_SUB_GROUP_NAME = "未知字幕组"
PREFERRED_TRACKER = "tr.bangumi.moe:6969"


@dataclass
class Res:
    """资源站上的一条资源"""
    title: str
    type_id: int
    type_name: str
    sub_group_id: int
    sub_group_name: str
    file_size: str
    page_url: str
    magnet: str
    info_hash: str
    publish_date: datetime
    seeding: str = ""
    leeching: str = ""
    finished: str = ""


def info_hash_from_magnet(magnet: str) -> str:
    """
    从磁力链接提取 info hash (小写 hex)。
    只支持 btih，32 位为 base32 编码，40 位为 hex。
    """
    match = MAGNET_HASH_RE.search(magnet)
    if not match:
        raise ResourceApiException(f"invalid magnet scheme: {magnet}")
    hash_type, value = match.group(1), match.group(2)
    if hash_type != "btih":
        raise ResourceApiException("can't handle magnet other than btih")
    if len(value) == 32:
        try:
            return base64.b32decode(value.upper()).hex()
        except (binascii.Error, ValueError) as e:
            raise ResourceApiException(f"invalid base32 hash {value}: {e}") from e
    if len(value) == 40:
        return value.lower()
    raise ResourceApiException(f"invalid hash len {len(value)}")


def normalize_magnet(magnet: str, info_hash: str) -> str:
    """xt 统一为 hex 形式，tracker 中 tr.bangumi.moe 排在最前"""
    params = parse_qsl(magnet.split("?", 1)[-1], keep_blank_values=True)
    trackers = [v for k, v in params if k == "tr"]
    trackers.sort(key=lambda t: PREFERRED_TRACKER not in t)
    rest = [(k, v) for k, v in params if k not in ("xt", "tr")]
    query = urlencode(rest, quote_via=quote)
    parts = [f"xt=urn:btih:{info_hash}"]
    if query: parts.append(query)
    parts.extend(f"tr={quote(t, safe='')}" for t in trackers)
    return "magnet:?" + "&".join(parts)


def parse_publish_date(text: str) -> datetime:
    return datetime.strptime(text.strip(), "%Y/%m/%d %H:%M")


def _td_text(td) -> str:
    return td.get_text(strip=True)


def parse_res_list(html: str, base_uri: str) -> Tuple[List[Res], bool]:
    """解析搜索结果页，返回 (资源列表, 是否还有下一页)，页面顺序为新到旧"""
    soup = BeautifulSoup(html, "html.parser")
    has_more = any(a.get_text(strip=True) == "下一頁" for a in soup.select("div.nav_title > a"))

    res_list = []
    for tr in soup.select("table#topic_list tbody tr"):
        tds = tr.find_all("td", recursive=False)
        if len(tds) < 8:
            logger.debug(f"跳过列数不足的行: {len(tds)}")
            continue
        type_a = tds[1].find("a")
        title_anchors = tds[2].find_all("a")
        magnet_a = tds[3].find("a")
        if not (type_a and title_anchors and magnet_a):
            continue
        title_a = title_anchors[-1]

        if len(title_anchors) == 2:
            team_a = title_anchors[0]
            sub_group_id = int(team_a["href"].replace("/topics/list/team_id/", ""))
            sub_group_name = team_a.get_text(strip=True)
        else:
            sub_group_id, sub_group_name = UNKNOWN_SUB_GROUP_ID, UNKNOWN_SUB_GROUP_NAME

        raw_magnet = magnet_a["href"]
        info_hash = info_hash_from_magnet(raw_magnet)
        date_span = tds[0].find("span")
        res_list.append(Res(
            title=title_a.get_text(strip=True),
            type_id=int(type_a["href"].replace("/topics/list/sort_id/", "")),
            type_name=type_a.get_text(strip=True),
            sub_group_id=sub_group_id,
            sub_group_name=sub_group_name,
            file_size=_td_text(tds[4]),
            page_url=f"{base_uri}{title_a['href']}",
            magnet=normalize_magnet(raw_magnet, info_hash),
            info_hash=info_hash,
            publish_date=parse_publish_date(date_span.get_text() if date_span else _td_text(tds[0])),
            seeding=_td_text(tds[5]),
            leeching=_td_text(tds[6]),
            finished=_td_text(tds[7]),
        ))
    return res_list, has_more


def parse_options(html: str, select_id: str) -> List[Tuple[int, str]]:
    """高级搜索页下拉框中的 (id, 名称)，只保留正数 id"""
    soup = BeautifulSoup(html, "html.parser")
    result = []
    for opt in soup.select(f"select#{select_id} option"):
        try:
            opt_id = int(opt.get("value", -1))
        except ValueError:
            continue
        if opt_id > 0:
            result.append((opt_id, opt.get_text(strip=True)))
    return result


class DmhyProvider:
    BASE_URL = "https://share.dmhy.org"

    def __init__(self, proxy: Optional[str] = None, base_uri: Optional[str] = None):
        self.proxy = proxy
        self.base_uri = base_uri or self.BASE_URL

    async def _advanced_search_page(self) -> str:
        return await fetch_text(f"{self.base_uri}/topics/advanced-search?team_id=0&sort_id=0&orderby=", self.proxy)

    async def sub_groups(self) -> List[Tuple[int, str]]:
        return parse_options(await self._advanced_search_page(), "AdvSearchTeam")

    async def res_types(self) -> List[Tuple[int, str]]:
        return parse_options(await self._advanced_search_page(), "AdvSearchSort")

    async def res_list(self, keywords: List[str], sub_group_id: Optional[int] = None,
                       res_type_id: Optional[int] = None,
                       publish_after: Optional[datetime] = None) -> Tuple[List[Res], bool]:
        """搜索第一页，结果按发布时间从旧到新排列"""
        query = urlencode({
            "keyword": " ".join(keywords),
            "sort_id": res_type_id or 0,
            "team_id": sub_group_id or 0,
            "order": "date-desc",
        })
        html = await fetch_text(f"{self.base_uri}/topics/list/page/1?{query}", self.proxy)
        res_list, has_more = parse_res_list(html, self.base_uri)

        if publish_after is not None and publish_after.tzinfo is not None:
            publish_after = publish_after.astimezone().replace(tzinfo=None)
        res_list = [
            r for r in res_list
            if (res_type_id is None or r.type_id == res_type_id)
            and (publish_after is None or r.publish_date >= publish_after)
        ]
        res_list.reverse()
        logger.debug(f"dmhy 搜索 {keywords}: {len(res_list)} 条")
        return res_list, has_more
