"""
命令行入口: check / watch / serve / parse / res
"""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import List, Optional, Tuple

from .checker import check_everything, watch
from .config import Config
from .exceptions import AnimeLinkerException
from .kernel import parse
from .log_config import setup_logging
from .providers.dmhy.client import DmhyProvider, Res


def print_id_and_name(data: List[Tuple[int, str]], chunk_size: int = 5):
    for i in range(0, len(data), chunk_size):
        print(" | ".join(f"{name}#{id_}" for id_, name in data[i:i + chunk_size]))


def print_res_list(res_list: List[Res], has_more: bool):
    for res in res_list:
        group = f"{res.sub_group_name}#{res.sub_group_id}" if res.sub_group_id > 0 else res.sub_group_name
        print(f"{res.publish_date:%Y/%m/%d %H:%M} | {res.title} | {res.type_name}#{res.type_id} | {group} | {res.file_size}")
    if has_more:
        print("还有更多...")


def cmd_parse(titles: List[str]) -> int:
    code = 0
    for title in titles:
        try:
            ep = parse(title)
        except AnimeLinkerException as e:
            print(f"解析'{title}'失败: {e}", file=sys.stderr)
            code = 1
            continue
        print(json.dumps({"kind": type(ep).__name__, **asdict(ep)}, ensure_ascii=False))
    return code


async def cmd_res(args, config: Config):
    api = DmhyProvider(config.proxy_url())
    if args.res_command == "search":
        print_res_list(*await api.res_list(args.keywords, args.subgroup_id, args.res_type_id))
    elif args.res_command == "types":
        print_id_and_name(await api.res_types())
    elif args.res_command == "groups":
        print_id_and_name(await api.sub_groups())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="anime-linker", description="番剧订阅下载与媒体库链接")
    parser.add_argument("--log-level", default=None, help="日志级别 (默认读取 ANIME_LINKER_LOGLEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="检查一次")
    sub.add_parser("watch", help="持续运行，间隔 check_interval 秒检查")
    serve = sub.add_parser("serve", help="启动 REST 服务")
    serve.add_argument("--port", type=int, default=3000)
    p = sub.add_parser("parse", help="解析发布标题")
    p.add_argument("titles", nargs="+")

    res = sub.add_parser("res", help="资源相关子命令")
    res_sub = res.add_subparsers(dest="res_command", required=True)
    search = res_sub.add_parser("search", help="搜索 [关键字] -t=类型ID -s=字幕组ID")
    search.add_argument("keywords", nargs="+")
    search.add_argument("-t", "--res-type-id", type=int, default=None)
    search.add_argument("-s", "--subgroup-id", type=int, default=None)
    res_sub.add_parser("types", help="资源类型")
    res_sub.add_parser("groups", help="字幕组")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "parse":
        return cmd_parse(args.titles)
    if args.command == "serve":
        from .main import serve
        serve(port=args.port)
        return 0
    if args.command == "watch":
        asyncio.run(watch())
        return 0

    try:
        config = Config.load()
    except AnimeLinkerException as e:
        print(e.message, file=sys.stderr)
        return 1
    if args.command == "check":
        asyncio.run(check_everything(config))
    elif args.command == "res":
        asyncio.run(cmd_res(args, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
