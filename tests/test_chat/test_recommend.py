"""Tests for recommendation markers."""

from navmark.chat.models import ChatEvent
from navmark.chat.recommend import MarkerFilter, extract_recommendations, strip_markers
from navmark.store.models import WebsiteRecord

POOL = [
    WebsiteRecord(id="w1", url="https://figma.com", title="Figma"),
    WebsiteRecord(id="w2", url="https://github.com", title="GitHub"),
    WebsiteRecord(id="w3", url="https://notion.so", title="Notion"),
    WebsiteRecord(id="w4", url="https://linear.app", title="Linear"),
]


def _run_filter(chunks):
    marker_filter = MarkerFilter()
    shown = [marker_filter.feed(c) for c in chunks]
    shown.append(marker_filter.flush())
    return "".join(shown)


def test_unknown_urls_dropped():
    text = "试试 [RECOMMEND:https://figma.com] 或者 [RECOMMEND:https://bad.com]"
    assert [w.id for w in extract_recommendations(text, POOL)] == ["w1"]


def test_recommendations_capped_and_ordered():
    text = "".join(
        f"[RECOMMEND:{url}]"
        for url in ["https://linear.app", "https://github.com", "https://figma.com", "https://notion.so"]
    )
    assert [w.id for w in extract_recommendations(text, POOL)] == ["w4", "w2", "w1"]


def test_recommendations_deduplicated():
    text = "[RECOMMEND:https://figma.com] again [RECOMMEND:https://figma.com]"
    assert [w.id for w in extract_recommendations(text, POOL)] == ["w1"]


def test_malformed_markers_ignored():
    text = "RECOMMEND:https://figma.com [RECOMMEND:figma.com] [RECOMMEND: https://github.com]"
    assert extract_recommendations(text, POOL) == []
    assert extract_recommendations("", POOL) == []


def test_strip_markers():
    assert strip_markers("看 [RECOMMEND:https://figma.com] 吧") == "看  吧"


def test_filter_hides_marker_split_across_chunks():
    shown = _run_filter(["试试 [RECO", "MMEND:https://fig", "ma.com] 吧"])
    assert shown == "试试  吧"


def test_filter_passes_plain_brackets():
    marker_filter = MarkerFilter()
    assert marker_filter.feed("price [1") == "price [1"
    assert marker_filter.feed("0%]") == "0%]"


def test_filter_releases_unfinished_marker_on_flush():
    marker_filter = MarkerFilter()
    assert marker_filter.feed("see [RECOMMEND:oops") == "see "
    assert marker_filter.flush() == "[RECOMMEND:oops"


def test_filter_releases_held_text_when_marker_breaks():
    assert _run_filter(["a [RECOMM", "and more"]) == "a [RECOMMand more"


def test_chat_event_sse_frames():
    assert ChatEvent(content="你好").to_sse() == 'data: {"content": "你好"}\n\n'
    assert ChatEvent(error="down").to_sse() == 'data: {"error": "down"}\n\n'
    assert ChatEvent(done=True).to_sse() == "data: [DONE]\n\n"
    frame = ChatEvent(recommendations=[{"id": "w1"}]).to_sse()
    assert frame == 'data: {"content": "", "recommendations": [{"id": "w1"}]}\n\n'


def test_chat_event_terminal():
    assert ChatEvent(done=True).is_terminal
    assert ChatEvent(error="x").is_terminal
    assert not ChatEvent(content="x").is_terminal


def test_filter_holds_marker_whose_url_contains_bracket():
    marker_filter = MarkerFilter()
    assert marker_filter.feed("see [RECOMMEND:https://a.com/[x") == "see "
    assert marker_filter.feed("y] done") == " done"
    assert marker_filter.flush() == ""


def test_filter_holds_lone_trailing_bracket():
    assert _run_filter(["look [", "RECOMMEND:https://figma.com] here"]) == "look  here"
