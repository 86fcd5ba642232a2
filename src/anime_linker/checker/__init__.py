import asyncio
import logging
from typing import Optional

from .collection import check_collection
from .mikan import check_mikan
from .res_rule import check_res_rule
from ..config import Config
from ..notify import Notifier
from ..providers.dmhy.client import DmhyProvider
from ..providers.mikan.client import MikanProvider
from ..providers.transmission.client import TransmissionClient

logger = logging.getLogger("anime-linker.checker")

__all__ = ["check_res_rule", "check_mikan", "check_collection", "check_everything", "watch"]


async def check_everything(config: Config, client=None):
    """
    执行一轮检查。
    获取下载器种子列表失败时整轮失败；单条规则 / 订阅 / 合集的错误只记录日志。
    """
    config.apply_hint_tables()
    client = client or TransmissionClient(config.downloader)
    server_torrents = await client.torrent_get()
    added_hashes = []
    proxy = config.proxy_url()
    notifier = Notifier(config.link.notify, proxy) if config.link and config.link.notify else None

    logger.info(f"{len(config.rules)} rules, {len(config.mikan)} mikan, {len(config.collections)} collections to be checked")
    res_api = DmhyProvider(proxy)
    for rule in config.rules:
        try:
            await check_res_rule(rule, client, server_torrents, added_hashes, res_api)
        except Exception:
            logger.exception(f"检查规则失败: {rule.name}")

    provider = MikanProvider(proxy)
    for m in config.mikan:
        try:
            await check_mikan(m, client, server_torrents, added_hashes, config.link, provider, notifier)
        except Exception:
            logger.exception(f"检查订阅失败: {m.name} ({m.url})")

    for c in config.collections:
        try:
            await check_collection(c, client, server_torrents, added_hashes, config.link, proxy, notifier)
        except Exception:
            logger.exception(f"检查合集失败: {c.title}")

    return added_hashes


async def watch(config: Optional[Config] = None):
    """
    间隔 check_interval 秒循环检查，未传入配置时每轮重新读取配置文件。
    """
    interval = config.check_interval if config else 600
    while True:
        try:
            current = config or Config.load()
            interval = current.check_interval
            await check_everything(current)
        except Exception:
            logger.exception("本轮检查失败")
        await asyncio.sleep(interval)
