"""Deterministic keyword and domain classifier.

Used when the model is unavailable or returns something unusable. It is
total: any input, empty strings included, yields a specific-sounding
category with 3-5 tags, never a generic "other" bucket.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from navmark import config
from navmark.classify.models import ClassificationResult
from navmark.web.extractor import title_from_url
from navmark.web.fetcher import normalize_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    keywords: tuple[str, ...]
    category: str
    icon: str
    tags: tuple[str, ...]


# First match wins, so specific rules come before broad ones.
RULES: list[Rule] = [
    Rule(
        ("github", "gitlab", "bitbucket", "code", "repository", "代码", "仓库"),
        "开发工具", "GitBranch", ("代码管理", "版本控制", "开源", "协作开发"),
    ),
    Rule(
        ("figma", "sketch", "adobe", "design", "ui", "ux", "设计"),
        "设计工具", "Palette", ("界面设计", "UI设计", "原型制作", "设计工具"),
    ),
    Rule(
        ("trading", "stock", "investment", "finance", "股票", "交易", "投资", "证券"),
        "金融理财", "TrendingUp", ("股票投资", "金融交易", "证券市场", "投资理财"),
    ),
    Rule(
        ("crypto", "bitcoin", "blockchain", "加密", "比特币", "区块链"),
        "加密货币", "Coins", ("数字货币", "加密交易", "区块链", "虚拟货币"),
    ),
    Rule(
        ("translate", "translation", "翻译", "语言"),
        "在线翻译", "Globe", ("语言翻译", "多语言", "在线工具", "文本翻译"),
    ),
    Rule(
        ("video", "youtube", "streaming", "视频", "直播"),
        "视频平台", "Video", ("视频播放", "在线视频", "流媒体", "视频分享"),
    ),
    Rule(
        ("music", "spotify", "audio", "音乐", "音频"),
        "音乐平台", "Music", ("在线音乐", "音频播放", "音乐流媒体", "音乐分享"),
    ),
    Rule(
        ("news", "blog", "article", "新闻", "博客", "文章"),
        "新闻资讯", "Newspaper", ("新闻资讯", "文章阅读", "媒体内容", "信息获取"),
    ),
    Rule(
        ("shop", "buy", "store", "ecommerce", "购物", "商店", "电商"),
        "购物电商", "ShoppingBag", ("在线购物", "电子商务", "商品销售", "购买服务"),
    ),
    Rule(
        ("learn", "education", "course", "tutorial", "学习", "教育", "课程"),
        "学习资源", "BookOpen", ("在线教育", "学习资源", "知识获取", "技能培训"),
    ),
    Rule(
        ("game", "gaming", "play", "游戏", "娱乐"),
        "在线游戏", "Gamepad2", ("网页游戏", "休闲娱乐", "游戏平台", "互动娱乐"),
    ),
    Rule(
        ("chat", "message", "social", "聊天", "社交", "消息"),
        "社交媒体", "MessageCircle", ("即时通讯", "社交网络", "在线聊天", "沟通工具"),
    ),
    Rule(
        ("tool", "utility", "converter", "工具", "转换", "实用"),
        "实用工具", "Wrench", ("在线工具", "实用功能", "效率工具", "便民服务"),
    ),
    Rule(
        ("programming", "developer", "api", "documentation", "编程", "开发"),
        "开发工具", "Code", ("软件开发", "编程工具", "API服务", "开发资源"),
    ),
]

# (category, tags, icon) for well-known hosts, matched by substring
KNOWN_DOMAINS: dict[str, tuple[str, tuple[str, ...], str]] = {
    "github.com": ("开发工具", ("开源代码", "版本控制", "开发者社区"), "GitBranch"),
    "figma.com": ("设计工具", ("界面设计", "协作设计", "原型制作"), "Palette"),
    "youtube.com": ("视频平台", ("视频播放", "在线视频", "视频分享"), "Video"),
    "twitter.com": ("社交媒体", ("社交网络", "微博客", "实时资讯"), "MessageCircle"),
    "linkedin.com": ("职业社交", ("职业网络", "求职招聘", "商务社交"), "Users"),
    "medium.com": ("内容平台", ("文章发布", "知识分享", "博客平台"), "PenTool"),
    "stackoverflow.com": ("开发社区", ("编程问答", "技术交流", "开发者社区"), "Code"),
}

TAG_VOCABULARY = [
    # technology
    "人工智能", "AI", "机器学习", "区块链", "云计算", "大数据",
    "前端", "后端", "全栈", "移动开发", "数据分析", "算法",
    # pricing and delivery
    "免费", "付费", "订阅", "会员", "企业版", "个人版",
    "实时", "离线", "同步", "云端", "本地", "跨平台",
    # industries
    "金融", "教育", "医疗", "电商", "游戏", "媒体",
    "设计", "营销", "办公", "娱乐", "社交", "新闻",
]
GENERIC_TAGS = ["在线服务", "网页应用"]

DESCRIPTION_TEMPLATES = {
    "开发工具": "面向开发者的代码托管、编程和开发工具",
    "设计工具": "专业的界面设计和原型制作平台",
    "金融理财": "提供股票投资和金融交易服务",
    "加密货币": "数字货币交易和区块链服务平台",
    "在线翻译": "多语言翻译和语言学习工具",
    "视频平台": "在线视频播放和内容分享平台",
    "音乐平台": "数字音乐播放和音频内容服务",
    "新闻资讯": "提供新闻资讯和内容发布服务",
    "购物电商": "电子商务和在线购物平台",
    "学习资源": "教育培训和知识分享平台",
    "在线游戏": "网页游戏和娱乐互动平台",
    "社交媒体": "社交网络和即时通讯服务",
    "实用工具": "提供各类在线工具和实用功能",
}

ALL_RULE_ICONS = {r.icon for r in RULES} | {v[2] for v in KNOWN_DOMAINS.values()} | {
    "GraduationCap", "Building", "Users", "ShoppingBag", "FileText", "Smartphone", "Globe",
}

_PARENS_RE = re.compile(r"[（(].+?[）)]")
_PUNCT_RE = re.compile(r"[，,。.！!？?；;：:]+")
_SPACE_RE = re.compile(r"\s+")
_TITLE_SEP_RE = re.compile(r"[\s\-_]+")


def _extra_tags(corpus: str) -> list[str]:
    found = [t for t in TAG_VOCABULARY if t.lower() in corpus]
    if len(found) < 2:
        found.extend(GENERIC_TAGS)
    return found


def _merge_tags(base: tuple[str, ...], corpus: str, max_extra: int = 2) -> list[str]:
    tags = list(base)
    extras = [t for t in _extra_tags(corpus) if t not in tags][:max_extra]
    return (tags + extras)[:config.MAX_TAGS]


def _hostname(url: str) -> str:
    if not url or not url.strip():
        return ""
    try:
        hostname = urlparse(normalize_url(url)).hostname or ""
    except ValueError:
        return ""
    return hostname.lower()


def _has_label(hostname: str, label: str) -> bool:
    return label in hostname.split(".")[1:]


def category_from_domain(url: str) -> tuple[str, list[str], str]:
    """Manufacture ``(category, tags, icon)`` from the hostname alone."""
    hostname = _hostname(url)
    if not hostname:
        return "网络服务", ["在线平台", "网络服务", "互联网应用"], "Globe"

    for domain, (category, tags, icon) in KNOWN_DOMAINS.items():
        if domain in hostname:
            return category, list(tags), icon

    if _has_label(hostname, "edu"):
        return "教育机构", ["教育资源", "学术网站", "高等教育"], "GraduationCap"
    if _has_label(hostname, "gov"):
        return "政府服务", ["政府网站", "公共服务", "官方信息"], "Building"
    if _has_label(hostname, "org"):
        return "组织机构", ["非营利组织", "公益机构", "社会组织"], "Users"

    if any(w in hostname for w in ("shop", "store", "mall")):
        return "在线商店", ["电子商务", "在线购物", "商品销售"], "ShoppingBag"
    if any(w in hostname for w in ("blog", "news")):
        return "内容网站", ["内容发布", "信息分享", "文章阅读"], "FileText"
    if any(w in hostname for w in ("app", "tool")):
        return "在线应用", ["网页应用", "在线工具", "实用服务"], "Smartphone"

    if hostname.startswith("www."):
        hostname = hostname[4:]
    site_name = hostname.split(".")[0]
    if not site_name:
        return "网络服务", ["在线平台", "网络服务", "互联网应用"], "Globe"
    return f"{site_name[:1].upper()}{site_name[1:]}服务", ["在线服务", "网站平台", "互联网服务"], "Globe"


def simple_description(title: str, category: str, original: str) -> str:
    """Template description, else a tidied original, else a generic sentence."""
    clean_title = _TITLE_SEP_RE.sub(" ", title).strip()

    template = DESCRIPTION_TEMPLATES.get(category)
    if template:
        return f"{clean_title} - {template}" if clean_title else template

    if original and 10 < len(original) < 200:
        simplified = _PARENS_RE.sub("", original)
        simplified = _PUNCT_RE.sub("，", simplified)
        simplified = _SPACE_RE.sub(" ", simplified).strip().strip("，")
        if len(simplified) > 80:
            return simplified[:77] + "..."
        if simplified:
            return simplified

    return f"{clean_title} - {category}相关服务平台" if clean_title else f"{category}相关服务平台"


def classify_by_rules(
    url: str,
    title: str,
    description: str,
    keywords: list[str] | None = None,
) -> ClassificationResult:
    """Classify from keyword rules, falling back to hostname heuristics."""
    title = title or ""
    description = description or ""
    corpus = f"{title} {description} {' '.join(keywords or [])}".lower()
    display_title = title.strip() or (title_from_url(url) if url and url.strip() else "")

    for rule in RULES:
        if any(k in corpus for k in rule.keywords):
            logger.debug(f"Rule matched for {url}: {rule.category}")
            return ClassificationResult(
                category=rule.category,
                tags=_merge_tags(rule.tags, corpus),
                description=simple_description(display_title, rule.category, description),
                suggested_icon=rule.icon,
                source="rules",
            )

    category, tags, icon = category_from_domain(url)
    logger.debug(f"No keyword rule matched for {url}, domain category: {category}")
    return ClassificationResult(
        category=category,
        tags=tags[:config.MAX_TAGS],
        description=simple_description(display_title, category, description),
        suggested_icon=icon,
        source="rules",
    )
