"""Tests for model-backed classification."""

import asyncio
import json

import pytest

from navmark.classify.ai import AIClassifier, match_existing, parse_classification
from navmark.exceptions import ClassificationError, UpstreamError
from navmark.store.models import CategorySummary

EXISTING = [
    CategorySummary(id="c1", name="金融理财", icon="TrendingUp", count=5),
    CategorySummary(id="c2", name="设计工具", icon="Palette", count=3),
    CategorySummary(id="c3", name="开发工具", icon="Code", count=1),
]


def _reply(**fields):
    return json.dumps(fields, ensure_ascii=False)


def _classify(backend, existing=None, **kwargs):
    classifier = AIClassifier(backend)
    return asyncio.run(classifier.classify(
        kwargs.get("url", "https://www.figma.com"),
        kwargs.get("title", "Figma"),
        kwargs.get("description", "Design tool"),
        kwargs.get("keywords"),
        existing,
        kwargs.get("page_content"),
    ))


def test_parse_plain_json():
    data = parse_classification('{"category": "设计工具", "tags": ["a"]}')
    assert data["category"] == "设计工具"


def test_parse_fenced_json():
    text = '```json\n{"category": "设计工具", "tags": ["a", "b"]}\n```'
    assert parse_classification(text)["tags"] == ["a", "b"]


def test_parse_json_with_chatter():
    text = 'Sure! Here it is: {"category": "开发工具", "tags": []} Hope that helps.'
    assert parse_classification(text)["category"] == "开发工具"


@pytest.mark.parametrize("text", [
    "",
    "not json at all",
    "{broken",
    "[1, 2]",
    '{"tags": ["a"]}',
    '{"category": "  ", "tags": []}',
    '{"category": "设计工具", "tags": "a, b"}',
])
def test_parse_rejects_malformed(text):
    with pytest.raises(ClassificationError):
        parse_classification(text)


def test_match_existing():
    assert match_existing("设计工具", EXISTING) == "设计工具"
    assert match_existing("UI设计", EXISTING) == "设计工具"
    assert match_existing("完全陌生", EXISTING) is None


def test_classify_success(make_backend):
    backend = make_backend(reply=_reply(
        category="设计工具",
        tags=["界面设计", "协作", "原型"],
        description="在线协作界面设计工具",
        suggestedCategoryIcon="palette",
    ))
    result = _classify(backend, EXISTING)
    assert result.category == "设计工具"
    assert result.tags == ["界面设计", "协作", "原型"]
    assert result.description == "在线协作界面设计工具"
    assert result.suggested_icon == "Palette"
    assert result.source == "ai"
    assert result.corrected_from is None


def test_prompt_lists_existing_categories(make_backend):
    backend = make_backend(reply=_reply(category="设计工具", tags=[]))
    _classify(backend, EXISTING, page_content="x" * 1500)
    system, user = backend.calls[0]
    assert '1. "金融理财" (5个网站)' in system["content"]
    assert "从现有的3个分类中选择" in system["content"]
    assert "x" * 1000 + "..." in user["content"]
    assert "x" * 1001 not in user["content"]


def test_new_category_corrected_to_existing(make_backend):
    backend = make_backend(reply=_reply(category="UI设计", tags=["设计"]))
    result = _classify(backend, EXISTING)
    assert result.category == "设计工具"
    assert result.corrected_from == "UI设计"


def test_unrelated_new_category_kept(make_backend):
    backend = make_backend(reply=_reply(category="完全陌生", tags=["x"]))
    result = _classify(backend, EXISTING)
    assert result.category == "完全陌生"
    assert result.corrected_from is None


def test_no_existing_categories_keeps_model_choice(make_backend):
    backend = make_backend(reply=_reply(category="UI设计", tags=[]))
    assert _classify(backend, []).category == "UI设计"


def test_tags_cleaned_and_capped(make_backend):
    backend = make_backend(reply=_reply(category="设计工具", tags=["a", " ", "b", "c", "d", "e", "f", "g"]))
    assert _classify(backend, EXISTING).tags == ["a", "b", "c", "d", "e"]


def test_missing_description_synthesized(make_backend):
    backend = make_backend(reply=_reply(category="设计工具", tags=[]))
    assert _classify(backend, EXISTING).description == "Figma - 设计工具相关服务"


def test_long_description_truncated(make_backend):
    backend = make_backend(reply=_reply(category="设计工具", tags=[], description="长" * 100))
    description = _classify(backend, EXISTING).description
    assert description == "长" * 77 + "..."


def test_icon_alias_and_missing_icon(make_backend):
    backend = make_backend(reply=_reply(category="设计工具", tags=[], icon="bar-chart"))
    assert _classify(backend, EXISTING).suggested_icon == "BarChart3"

    backend = make_backend(reply=_reply(category="设计工具", tags=[]))
    assert _classify(backend, EXISTING).suggested_icon == ""


def test_backend_error_propagates(make_backend):
    backend = make_backend(error=UpstreamError("boom", status_code=500))
    with pytest.raises(UpstreamError):
        _classify(backend, EXISTING)


def test_malformed_reply_raises(make_backend):
    backend = make_backend(reply="I think this is a design tool.")
    with pytest.raises(ClassificationError):
        _classify(backend, EXISTING)
