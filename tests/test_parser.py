"""
标题解析测试

Run with: pytest -q
"""

import pytest

from anime_linker import parse, RegularEpisode, SpecialEpisode
from anime_linker.exceptions import AmbiguousEpisodeTrailer, MissingNameBlock, TitleParseError


def test_fractional_episode_is_special():
    title = "[Up to 21°C] 擅长逃跑的殿下 / Nige Jouzu no Wakagimi - 9.5 (Baha 1920x1080 AVC AAC MP4)"
    ep = parse(title)
    assert ep == SpecialEpisode(raw_title=title)


def test_season_marker_in_name_block():
    ep = parse("【幻樱字幕组】【4月新番】【古见同学有交流障碍症 第二季 Komi-san wa, Komyushou Desu. S02】【22】【GB_MP4】【1920X1080】")
    assert isinstance(ep, RegularEpisode)
    assert ep.sub_group == "幻樱字幕组"
    assert ep.season == 2
    assert ep.name_en == "Komi-san wa, Komyushou Desu."
    assert ep.name_zh == "古见同学有交流障碍症"
    assert ep.episode == 22
    assert ep.sub_tag == "GB"
    assert ep.resolution == "1920X1080"


def test_slash_separated_names_with_trailing_episode():
    ep = parse("[百冬练习组&LoliHouse] BanG Dream! 少女乐团派对！☆PICO FEVER！ / Garupa Pico: Fever! - 26 [WebRip 1080p HEVC-10bit AAC][简繁内封字幕][END] [101.69 MB]")
    assert ep.sub_group == "百冬练习组&LoliHouse"
    assert ep.season == 1
    assert ep.name_en == "Garupa Pico: Fever!"
    assert ep.name_zh == "BanG Dream! 少女乐团派对！☆PICO FEVER！"
    assert ep.episode == 26
    assert ep.sub_tag == "简繁内封字幕"
    assert ep.resolution == "1080p"
    assert ep.source == "WebRip"


def test_promo_block_is_dropped():
    ep = parse("【喵萌奶茶屋】★04月新番★[夏日重现/Summer Time Rendering][11][1080p][繁日双语][招募翻译]")
    assert ep.sub_group == "喵萌奶茶屋"
    assert ep.season == 1
    assert ep.name_en == "Summer Time Rendering"
    assert ep.name_zh == "夏日重现"
    assert ep.episode == 11
    assert ep.sub_tag == "繁日双语"
    assert ep.resolution == "1080p"


def test_episode_embedded_in_name_block():
    ep = parse("[Lilith-Raws] 关于我在无意间被隔壁的天使变成废柴这件事 / Otonari no Tenshi-sama - 09 [Baha][WEB-DL][1080p][AVC AAC][CHT][MP4]")
    assert ep.sub_group == "Lilith-Raws"
    assert ep.season == 1
    assert ep.episode == 9
    assert ep.name_en == "Otonari no Tenshi-sama"
    assert ep.name_zh == "关于我在无意间被隔壁的天使变成废柴这件事"
    assert ep.resolution == "1080p"
    assert ep.source == "Baha"


def test_names_split_by_language_runs():
    ep = parse("[梦蓝字幕组]New Doraemon 哆啦A梦新番[747][2023.02.25][AVC][1080P][GB_JP][MP4]")
    assert ep.sub_group == "梦蓝字幕组"
    assert ep.episode == 747
    assert ep.name_en == "New Doraemon"
    assert ep.name_zh == "哆啦A梦新番"
    assert ep.resolution == "1080P"


def test_episode_block_with_suffix():
    ep = parse("[织梦字幕组][尼尔：机械纪元 NieR Automata Ver1.1a][02集][1080P][AVC][简日双语]")
    assert ep.episode == 2
    assert ep.name_en == "NieR Automata Ver1.1a"
    assert ep.name_zh == "尼尔：机械纪元"
    assert ep.resolution == "1080P"
    assert ep.sub_tag == "简日双语"


def test_japanese_name_and_ep_prefix():
    ep = parse("[MagicStar] 假面骑士Geats / 仮面ライダーギーツ EP33 [WEBDL] [1080p] [TTFC]【生】")
    assert ep.sub_group == "MagicStar"
    assert ep.episode == 33
    assert ep.name_zh == "假面骑士Geats"
    assert ep.name_jp == "仮面ライダーギーツ"
    assert ep.name_en is None
    assert ep.resolution == "1080p"


def test_single_bracket_title_is_split_on_spaces():
    ep = parse("【极影字幕社】★4月新番 天国大魔境 Tengoku Daimakyou 第05话 GB 720P MP4（字幕社招人内详）")
    assert ep.sub_group == "极影字幕社"
    assert ep.episode == 5
    assert ep.name_zh == "天国大魔境"
    assert ep.name_en == "Tengoku Daimakyou"
    assert ep.sub_tag == "GB"
    assert ep.resolution == "720P"


def test_first_name_per_language_wins():
    ep = parse("【极影字幕·毁片党】LoveLive! SunShine!! 幻日的夜羽 -SUNSHINE in the MIRROR- 第01集 TV版 HEVC_opus 1080p ")
    assert ep.sub_group == "极影字幕·毁片党"
    assert ep.episode == 1
    assert ep.name_zh == "幻日的夜羽"
    assert ep.name_en == "LoveLive! SunShine!!"
    assert ep.resolution == "1080p"


def test_hyphens_inside_name_survive():
    ep = parse("[ANi] BLEACH 死神 千年血战篇-诀别谭- - 14 [1080P][Baha][WEB-DL][AAC AVC][CHT][MP4]")
    assert ep.sub_group == "ANi"
    assert ep.episode == 14
    assert ep.name_zh == "死神 千年血战篇-诀别谭-"
    assert ep.name_en == "BLEACH"
    assert ep.resolution == "1080P"


def test_region_annotation_is_stripped():
    ep = parse("[ANi] 间谍过家家（仅限港澳台地区） / SPY×FAMILY - 03 [1080P][Baha][WEB-DL][AAC AVC][CHT][MP4]")
    assert ep.name_zh == "间谍过家家"
    assert ep.episode == 3


def test_revision_and_season_override():
    ep = parse("[Up to 21°C] 关于我转生变成史莱姆这档事 第三季 / Tensei shitara Slime Datta Ken 3rd Season - 49 (Baha 1920x1080 AVC AAC MP4)")
    assert ep.season == 3
    assert ep.episode == 49
    assert ep.name_zh == "关于我转生变成史莱姆这档事"
    assert ep.name_en == "Tensei shitara Slime Datta Ken 3rd Season"
    revised = ep.with_episode_offset(-48)
    assert revised.episode == 1
    assert ep.episode == 49
    assert revised.with_season(1).season == 1


def test_title_without_blocks_is_special():
    assert parse("  JustSomeFile  ") == SpecialEpisode(raw_title="JustSomeFile")


def test_zero_season_marker_is_skipped():
    ep = parse("[Group][Show S00 Season 2][05]")
    assert (ep.season, ep.episode, ep.name_en) == (2, 5, "Show")


def test_no_episode_is_special():
    title = "[Group][Some Show][BDRip][1080p]"
    assert parse(title) == SpecialEpisode(raw_title=title)


def test_trailing_text_after_embedded_episode_fails():
    with pytest.raises(AmbiguousEpisodeTrailer) as exc:
        parse("[Group][Some Show - 05 extra][1080p]")
    assert exc.value.trailer == "extra"
    assert isinstance(exc.value, TitleParseError)


def test_episode_right_after_group_has_no_name():
    with pytest.raises(MissingNameBlock):
        parse("[Group][01][1080p]")


def test_name_block_without_names_fails():
    with pytest.raises(MissingNameBlock):
        parse("[Group][★★][01]")


def test_audit_logs_are_collected():
    logs = []
    parse("[Lilith-Raws] 关于我在无意间被隔壁的天使变成废柴这件事 / Otonari no Tenshi-sama - 09 [Baha][WEB-DL][1080p][AVC AAC][CHT][MP4]", current_logs=logs)
    assert logs[0].startswith("🚀")
    assert any("STEP 3" in line for line in logs)
    assert logs[-1].startswith("┗ 解析完成")


def test_parse_is_pure():
    title = "[ANi] BLEACH 死神 千年血战篇-诀别谭- - 14 [1080P][Baha][WEB-DL][AAC AVC][CHT][MP4]"
    assert parse(title) == parse(title)
