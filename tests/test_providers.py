import asyncio
import json

import httpx
import pytest

from anime_linker.config import TransmissionConfig
from anime_linker.exceptions import DownloaderException
from anime_linker.providers.mikan.client import parse_feed
from anime_linker.providers.transmission.client import SESSION_HEADER, TransmissionClient

RSS = """<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
<channel>
  <title>Mikan Project - 测试</title>
  <link>https://mikanani.me/RSS/Bangumi?bangumiId=2968</link>
  <description>Mikan Project</description>
  <item>
    <guid isPermaLink="false">[Lilith-Raws] Otonari no Tenshi-sama - 09</guid>
    <link>https://mikanani.me/Home/Episode/aaa</link>
    <title>[Lilith-Raws] Otonari no Tenshi-sama - 09 [Baha][WEB-DL][1080p]</title>
    <enclosure type="application/x-bittorrent" length="100" url="https://mikanani.me/Download/20230304/aaa.torrent" />
  </item>
  <item>
    <guid isPermaLink="false">no-enclosure</guid>
    <link>https://mikanani.me/Home/Episode/bbb</link>
    <title>没有种子的条目</title>
  </item>
  <item>
    <guid isPermaLink="false">[Lilith-Raws] Otonari no Tenshi-sama - 10</guid>
    <link>https://mikanani.me/Home/Episode/ccc</link>
    <title>[Lilith-Raws] Otonari no Tenshi-sama - 10 [Baha][WEB-DL][1080p]</title>
    <enclosure type="application/x-bittorrent" length="100" url="https://mikanani.me/Download/20230311/ccc.torrent" />
  </item>
</channel>
</rss>
"""


def test_parse_feed():
    assert parse_feed(RSS) == [
        ("[Lilith-Raws] Otonari no Tenshi-sama - 09 [Baha][WEB-DL][1080p]",
         "https://mikanani.me/Download/20230304/aaa.torrent"),
        ("[Lilith-Raws] Otonari no Tenshi-sama - 10 [Baha][WEB-DL][1080p]",
         "https://mikanani.me/Download/20230311/ccc.torrent"),
    ]


def _transmission(handler) -> TransmissionClient:
    config = TransmissionConfig(url="http://tr.local/transmission/rpc", download_root="/downloads/al/")
    return TransmissionClient(config, transport=httpx.MockTransport(handler))


def test_transmission_session_retry_and_get():
    requests = []

    def handler(request: httpx.Request):
        requests.append(request)
        if request.headers.get(SESSION_HEADER) != "sid-1":
            return httpx.Response(409, headers={SESSION_HEADER: "sid-1"})
        body = json.loads(request.content)
        assert body["method"] == "torrent-get"
        return httpx.Response(200, json={"result": "success", "arguments": {"torrents": [
            {"id": 3, "hashString": "ABCDEF", "name": "Show", "downloadDir": "/downloads/al/Show/", "percentDone": 1},
            {"id": 4, "hashString": "123456", "name": "Other", "downloadDir": "/downloads/al/Other/", "percentDone": 0.5},
        ]}})

    client = _transmission(handler)
    torrents = asyncio.run(client.torrent_get())
    assert len(requests) == 2
    assert client.session_id == "sid-1"
    assert [t.hash for t in torrents] == ["abcdef", "123456"]
    assert torrents[0].is_complete and not torrents[1].is_complete


def test_transmission_add_payload():
    bodies = []

    def handler(request: httpx.Request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"result": "success", "arguments": {}})

    client = _transmission(handler)
    asyncio.run(client.torrent_add("magnet:?xt=urn:btih:abc", "某番"))
    asyncio.run(client.torrent_add_by_meta("ZGF0YQ==", "某番"))
    assert bodies[0] == {"method": "torrent-add",
                         "arguments": {"filename": "magnet:?xt=urn:btih:abc", "download-dir": "/downloads/al/某番/"}}
    assert bodies[1]["arguments"] == {"metainfo": "ZGF0YQ==", "download-dir": "/downloads/al/某番/", "paused": False}


@pytest.mark.parametrize("response", [
    httpx.Response(500),
    httpx.Response(200, json={"result": "duplicate torrent", "arguments": {}}),
])
def test_transmission_errors(response):
    client = _transmission(lambda request: response)
    with pytest.raises(DownloaderException):
        asyncio.run(client.torrent_get())
