"""String similarity measures used to keep the category set free of near-duplicates."""

from __future__ import annotations

from typing import Iterable, Sequence

from navmark import config

# Families of interchangeable words in category names.
KEYWORD_FAMILIES: dict[str, list[str]] = {
    "金融": ["金融", "理财", "投资", "股票", "基金", "银行", "财务"],
    "设计": ["设计", "UI", "界面", "原型", "视觉", "创意"],
    "开发": ["开发", "编程", "代码", "程序", "技术", "软件"],
    "工具": ["工具", "实用", "应用", "服务"],
    "学习": ["学习", "教育", "培训", "课程", "知识"],
    "娱乐": ["娱乐", "游戏", "视频", "音乐", "电影"],
    "媒体": ["媒体", "新闻", "资讯", "博客", "文章"],
    "社交": ["社交", "聊天", "通讯", "交流", "分享"],
}

# Same-family names score at most this much, so they never tie an identical name.
FAMILY_WEIGHT = 0.9


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def edit_similarity(a: str, b: str) -> float:
    """``1 - distance / max(len)``; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def _families(name: str) -> set[str]:
    lowered = name.lower()
    return {
        family
        for family, words in KEYWORD_FAMILIES.items()
        if any(w.lower() in lowered for w in words)
    }


def category_keywords(name: str) -> list[str]:
    """All words of every family ``name`` touches, or ``[name]`` if none."""
    result: list[str] = []
    for family in KEYWORD_FAMILIES:
        if family in _families(name):
            result.extend(KEYWORD_FAMILIES[family])
    return result or [name]


def keyword_overlap(a: str, b: str) -> float:
    """Pairwise containment matches between keyword sets over the larger set size.

    Can exceed 1.0 when keywords contain one another.
    """
    keywords_a = category_keywords(a)
    keywords_b = category_keywords(b)
    matches = sum(
        1
        for ka in keywords_a
        for kb in keywords_b
        if ka in kb or kb in ka
    )
    return matches / max(len(keywords_a), len(keywords_b))


def family_similarity(a: str, b: str) -> float:
    """Jaccard index of the keyword families both names touch."""
    fa, fb = _families(a), _families(b)
    if not fa or not fb:
        return 0.0
    return len(fa & fb) / len(fa | fb)


def name_similarity(a: str, b: str) -> float:
    """Similarity used for suggestions: edit distance or shared vocabulary."""
    a_key, b_key = a.strip().casefold(), b.strip().casefold()
    if a_key == b_key:
        return 1.0
    return max(edit_similarity(a_key, b_key), FAMILY_WEIGHT * family_similarity(a, b))


def most_similar(
    name: str,
    candidates: Iterable[str],
    threshold: float = config.CATEGORY_MATCH_THRESHOLD,
) -> str | None:
    """Candidate with the highest keyword overlap above ``threshold``."""
    best_name, best_score = None, threshold
    for candidate in candidates:
        score = keyword_overlap(name, candidate)
        if score > best_score:
            best_name, best_score = candidate, score
    return best_name


def similar_names(
    name: str,
    candidates: Sequence[str],
    min_similarity: float = config.SUGGEST_MIN_SIMILARITY,
    limit: int = config.MAX_SUGGESTIONS,
) -> list[str]:
    """Up to ``limit`` candidates scoring strictly between ``min_similarity`` and 1.0."""
    return [
        c for c in candidates
        if min_similarity < name_similarity(name, c) < 1.0
    ][:limit]
