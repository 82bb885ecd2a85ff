"""Prompt text for website classification."""

from __future__ import annotations

from navmark.store.models import CategorySummary

_EXISTING_BLOCK = """
当前数据库中已有的分类（按使用频率排序）：
{listing}

严格要求：你必须从上述现有分类中选择一个！
分类匹配规则：
- 金融/投资/理财/股票/基金/银行 → 选择"金融理财"
- 设计/UI/原型/Figma/Sketch → 选择"设计工具"
- 编程/代码/GitHub/开发 → 选择"开发工具"
- 视频/音乐/电影/游戏 → 选择"娱乐媒体"
- 新闻/博客/资讯/文章 → 选择"新闻资讯"
- 社交/聊天/通讯/微博 → 选择"社交媒体"
- 学习/教育/课程/培训 → 选择"学习资源"
- 其他工具类 → 选择"实用工具"

禁止创建与现有分类相似的新分类（例如已有"金融理财"时不要创建"金融投资"，
已有"设计工具"时不要创建"UI设计"，已有"开发工具"时不要创建"编程工具"）。
你的任务：从现有的{total}个分类中选择最合适的一个！
"""

_RULES_BLOCK = """
分析规则：
1. 分类选择：
   第一步：检查现有分类列表，找到最相关的分类
   第二步：如果有多个候选，选择最常用的（网站数量多的）
   第三步：只有在所有现有分类都完全不相关时才能创建新分类
   判断标准：只要有30%相关性就应该选择现有分类

2. 标签生成：必须生成3-5个相关标签，标签应该：
   - 基于页面实际内容和功能特点
   - 反映网站的核心功能和特点
   - 包含行业关键词和用户搜索词

3. 描述优化：
   - 必须基于页面实际内容和网站的实际功能生成全新的描述
   - 不要直接使用网页自带的描述，要重新组织语言
   - 描述要简洁准确（30-80字），突出核心价值和用途
   - 使用客观、专业的语调，避免营销性语言

4. 图标建议：使用 Lucide 图标的大驼峰命名格式（如 Code、Palette、BarChart3、Gamepad2）

常见分类及推荐图标（仅供参考，优先使用现有分类）：
- 代码开发：Code, Terminal, GitBranch, Database
- UI设计：Palette, Paintbrush, Pen, Image
- 在线工具：Wrench, Settings, Zap
- 学习资源：BookOpen, GraduationCap, Library, Brain
- 娱乐媒体：Gamepad2, Music, Video, Smile
- 社交通讯：MessageCircle, Users, MessageSquare, Share2
- 新闻博客：Newspaper, Radio, Rss, FileText
- 电商购物：ShoppingBag, ShoppingCart, Store, CreditCard
- 金融投资：TrendingUp, BarChart3, DollarSign, PieChart, Coins
- 健康医疗：Heart, Activity, Stethoscope, Shield
- 旅行交通：Plane, Car, Navigation, Compass

请只以JSON格式回复，不要附加任何其他文字：
{
  "category": "分类名称",
  "tags": ["3-5个标签"],
  "description": "基于网站功能重新生成的描述（30-80字）",
  "suggestedCategoryIcon": "TrendingUp"
}"""

PAGE_CONTENT_PROMPT_LIMIT = 1000


def build_system_prompt(existing: list[CategorySummary]) -> str:
    parts = ["你是一个专业的网站分析师。请根据提供的网站信息，进行智能分析并返回合适的分类、标签和优化后的描述。"]
    if existing:
        listing = "\n".join(
            f'{i}. "{c.name}" ({c.count}个网站)' for i, c in enumerate(existing, start=1)
        )
        parts.append(_EXISTING_BLOCK.format(listing=listing, total=len(existing)))
    parts.append(_RULES_BLOCK)
    return "\n".join(parts)


def build_user_prompt(
    url: str,
    title: str,
    description: str,
    keywords: list[str] | None = None,
    page_content: str | None = None,
) -> str:
    lines = [
        "请分析以下网站信息：",
        f"网站URL: {url}",
        f"网站标题: {title}",
        f"网站描述: {description}",
        f"关键词: {', '.join(keywords) if keywords else '无'}",
    ]
    if page_content:
        excerpt = page_content[:PAGE_CONTENT_PROMPT_LIMIT]
        if len(page_content) > PAGE_CONTENT_PROMPT_LIMIT:
            excerpt += "..."
        lines.append(f"\n页面主要内容: {excerpt}")
    lines.append("\n请基于以上信息（特别是页面内容）提供详细的分析结果。")
    return "\n".join(lines)
