import logging
from typing import List, Optional

from ..config import Rule
from ..providers.dmhy.client import DmhyProvider
from ..providers.transmission.client import ServerTorrent

logger = logging.getLogger("anime-linker.checker.res_rule")


async def check_res_rule(rule: Rule, client, server_torrents: List[ServerTorrent], added_hashes: List[str],
                         res_api: Optional[DmhyProvider] = None):
    res_api = res_api or DmhyProvider()
    res_list, _ = await res_api.res_list(rule.keywords, rule.sub_group_id, rule.res_type_id, rule.publish_after)
    server_hashes = {t.hash for t in server_torrents}
    for res in res_list:
        if res.info_hash in server_hashes or res.info_hash in added_hashes:
            continue
        await client.torrent_add(res.magnet, rule.name)
        added_hashes.append(res.info_hash)
        logger.info(f"加入下载列表: {res.title}")
