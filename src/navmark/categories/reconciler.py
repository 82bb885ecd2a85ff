"""Map free-text category names onto the category store."""

from __future__ import annotations

import logging

from navmark import config
from navmark.categories import icons
from navmark.categories.icons import IconRegistry
from navmark.categories.similarity import similar_names
from navmark.exceptions import DuplicateCategoryError
from navmark.store.base import CategoryStore
from navmark.store.models import CategorySummary

logger = logging.getLogger(__name__)

CATEGORY_ICONS: dict[str, str] = {
    # tools
    "工具效率": "Wrench",
    "实用工具": "Wrench",
    "在线工具": "Globe",
    # development
    "开发工具": "Code",
    "开发技术": "Code",
    "编程开发": "Code",
    "技术文档": "FileCode",
    "代码托管": "GitBranch",
    # design
    "设计创意": "Palette",
    "UI设计": "Paintbrush",
    "设计工具": "Pen",
    "创意灵感": "Lightbulb",
    # learning
    "学习资源": "BookOpen",
    "学习教育": "BookOpen",
    "在线课程": "GraduationCap",
    "知识库": "Library",
    "教程文档": "Book",
    # entertainment
    "娱乐媒体": "Gamepad2",
    "娱乐休闲": "Gamepad2",
    "游戏": "Gamepad2",
    "音乐": "Music",
    "视频": "Video",
    # social
    "社交媒体": "MessageCircle",
    "社交平台": "Users",
    "聊天通讯": "MessageSquare",
    "社区论坛": "Users",
    # news
    "新闻资讯": "Newspaper",
    "博客": "PenTool",
    "媒体": "Radio",
    # shopping
    "购物电商": "ShoppingBag",
    "电商平台": "ShoppingCart",
    "品牌官网": "Store",
    # life
    "生活服务": "MapPin",
    "本地服务": "Map",
    "实用服务": "Settings",
    # finance
    "金融理财": "TrendingUp",
    "银行": "Building",
    "投资": "TrendingUp",
    "支付": "CreditCard",
    "证券": "BarChart3",
    "股票": "TrendingUp",
    "基金": "PieChart",
    # health
    "医疗健康": "Heart",
    "健康管理": "Activity",
    "健身运动": "Activity",
    # travel
    "旅游出行": "Plane",
    "交通": "Car",
    "地图导航": "Navigation",
    # office
    "办公软件": "FileText",
    "项目管理": "Calendar",
    "团队协作": "Users",
    # data
    "数据分析": "BarChart3",
    "数据可视化": "PieChart",
    "商业智能": "Brain",
    # technology
    "人工智能": "Cpu",
    "机器学习": "Bot",
    "区块链": "Link",
    "物联网": "Wifi",
    "云服务": "Cloud",
    # catch-all
    "其他": "MoreHorizontal",
    "未分类": "Folder",
}

# (words, icon), checked in order against the lowercased name
KEYWORD_ICONS: list[tuple[tuple[str, ...], str]] = [
    (("工具", "tool"), "Wrench"),
    (("开发", "编程", "code", "dev"), "Code"),
    (("设计", "design"), "Palette"),
    (("学习", "教育", "learn"), "BookOpen"),
    (("游戏", "娱乐", "game"), "Gamepad2"),
    (("社交", "social"), "MessageCircle"),
    (("新闻", "资讯", "news"), "Newspaper"),
    (("购物", "电商", "shop"), "ShoppingBag"),
    (("生活", "服务", "life"), "MapPin"),
    (("金融", "理财", "股票", "投资", "finance"), "TrendingUp"),
    (("健康", "医疗", "health"), "Heart"),
    (("旅游", "出行", "travel"), "Plane"),
]


def icon_for_category(name: str) -> str:
    """Pick an icon from the category name alone."""
    if name in CATEGORY_ICONS:
        return CATEGORY_ICONS[name]

    for key, icon in CATEGORY_ICONS.items():
        if key in name or name in key:
            return icon

    lowered = name.lower()
    for words, icon in KEYWORD_ICONS:
        if any(w in lowered for w in words):
            return icon

    return icons.DEFAULT_ICON


class CategoryReconciler:
    """Find categories by name or create them with a sensible icon.

    Args:
        store: The category store.
        registry: When given, suggested icons it does not know are
            replaced by the name-derived icon.
    """

    def __init__(self, store: CategoryStore, registry: IconRegistry | None = None):
        self.store = store
        self.registry = registry

    def _choose_icon(self, name: str, suggested_icon: str | None) -> str:
        if suggested_icon and suggested_icon.strip():
            icon = icons.normalize(suggested_icon)
            if self.registry is None or icon in self.registry:
                return icon
            logger.debug(f"Icon {icon} not in registry, deriving from name")
        return icon_for_category(name)

    def find_or_create(self, name: str, suggested_icon: str | None = None) -> CategorySummary:
        category, _ = self.get_or_create(name, suggested_icon)
        return category

    def get_or_create(
        self, name: str, suggested_icon: str | None = None
    ) -> tuple[CategorySummary, bool]:
        """Like ``find_or_create``, also reporting whether this call inserted the row."""
        name = name.strip()
        if not name:
            raise ValueError("Category name must not be empty")

        existing = self.store.find_by_name(name)
        if existing is not None:
            return existing, False

        icon = self._choose_icon(name, suggested_icon)
        max_order = self.store.max_sort_order()
        sort_order = (max_order or 0) + 1
        try:
            category = self.store.create(name, icon, sort_order)
        except DuplicateCategoryError:
            # Lost a creation race; the other writer's row is the answer.
            existing = self.store.find_by_name(name)
            if existing is None:
                raise
            return existing, False

        logger.info(f"Created category: {name} (icon: {icon})")
        return category, True

    def suggest_similar(
        self,
        name: str,
        min_similarity: float = config.SUGGEST_MIN_SIMILARITY,
        limit: int = config.MAX_SUGGESTIONS,
    ) -> list[str]:
        """Existing names that look related to ``name`` but are not it. Advisory only."""
        names = [c.name for c in self.store.list_all()]
        return similar_names(name, names, min_similarity=min_similarity, limit=limit)
