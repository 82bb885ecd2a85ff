"""Navigation assistant chat with inline website recommendations."""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import AsyncIterator

from navmark import config
from navmark.chat.models import ChatEvent
from navmark.chat.recommend import MarkerFilter, extract_recommendations
from navmark.exceptions import LLMError
from navmark.llm.base import BaseChatBackend
from navmark.store.base import CategoryStore, WebsiteStore
from navmark.store.models import CategorySummary, WebsiteRecord

logger = logging.getLogger(__name__)

_SYSTEM_TEMPLATE = """你是一个智能导航助手。

用户当前收藏情况：
分类信息：
{categories}

用户已收藏的网站：
{saved}

数据库中所有可推荐的网站：
{pool}

你的能力：
1. 根据用户的具体问题内容，从数据库中推荐0-{limit}个最相关的网站
2. 回答各种网站使用、技术工具、行业趋势等问题
3. 提供专业的建议和解答

推荐规则：
- 根据用户问题的具体内容来判断是否需要推荐网站，不需要时就不推荐
- 推荐时要说明网站如何解决用户的问题或满足需求
- 可以推荐用户已收藏的网站，如果它们与问题高度相关
- 必须从"数据库中所有可推荐的网站"中选择

推荐格式（非常重要）：
需要推荐网站时，在回复中包含特殊标记 [RECOMMEND:完整的网站URL]
正确示例：[RECOMMEND:https://figma.com]
错误示例：RECOMMEND:https://figma.com（缺少方括号）、[RECOMMEND:figma.com]（缺少协议）

请用中文回复，保持友好、专业且富有洞察力的语调。"""

_RECOMMEND_URLS_PROMPT = (
    "你是一个智能网站推荐助手。根据用户的兴趣和访问历史，推荐5-10个相关的优质网站。"
    "请只返回网站URL，每行一个。"
)


def _describe_site(site: WebsiteRecord, category_names: dict[str, str]) -> str:
    tags = ", ".join(site.tags) if site.tags else "无"
    category = category_names.get(site.category_id or "", "未分类")
    return (
        f"• {site.title} - {site.description}\n"
        f"  标签: {tags}\n"
        f"  分类: {category}\n"
        f"  {site.url}"
    )


class ChatAssistant:
    """Streams chat replies and attaches recommended websites.

    Args:
        backend: Chat backend producing the reply.
        websites: Website store; every stored site is a recommendation candidate.
        categories: Optional category store used for category names and counts.
        model: Optional model override for the backend.
    """

    def __init__(
        self,
        backend: BaseChatBackend,
        websites: WebsiteStore,
        categories: CategoryStore | None = None,
        model: str | None = None,
        max_recommendations: int = config.MAX_RECOMMENDATIONS,
    ):
        self.backend = backend
        self.websites = websites
        self.categories = categories
        self.model = model
        self.max_recommendations = max_recommendations

    def build_system_prompt(
        self,
        pool: list[WebsiteRecord],
        saved: list[WebsiteRecord] | None = None,
        categories: list[CategorySummary] | None = None,
    ) -> str:
        if categories is None and self.categories is not None:
            categories = self.categories.list_all()
        categories = categories or []
        names = {c.id: c.name for c in categories}

        category_text = "\n".join(f"• {c.name} ({c.count}个网站)" for c in categories) or "暂无分类"
        saved_text = "\n\n".join(_describe_site(s, names) for s in saved or []) or "暂无收藏网站"
        pool_text = "\n\n".join(_describe_site(s, names) for s in pool) or "暂无可推荐网站"
        return _SYSTEM_TEMPLATE.format(
            categories=category_text,
            saved=saved_text,
            pool=pool_text,
            limit=self.max_recommendations,
        )

    async def stream_reply(
        self,
        messages: list[dict],
        websites: list[WebsiteRecord] | None = None,
        categories: list[CategorySummary] | None = None,
    ) -> AsyncIterator[ChatEvent]:
        """Yield content events, then recommendations, then a terminal event.

        Upstream failures end the stream with a single error event. Closing
        the generator early closes the upstream stream.
        """
        pool = self.websites.list_all()
        system = {
            "role": "system",
            "content": self.build_system_prompt(pool, saved=websites, categories=categories),
        }
        logger.info(f"Chat request: {len(messages)} messages, {len(pool)} candidate websites")

        parts: list[str] = []
        marker_filter = MarkerFilter()
        try:
            async with aclosing(self.backend.stream([system, *messages], model=self.model)) as deltas:
                async for delta in deltas:
                    parts.append(delta)
                    visible = marker_filter.feed(delta)
                    if visible:
                        yield ChatEvent(content=visible)
        except LLMError as e:
            logger.warning(f"Chat stream failed: {e}")
            yield ChatEvent(error=str(e))
            return

        tail = marker_filter.flush()
        if tail:
            yield ChatEvent(content=tail)

        recommendations = extract_recommendations(
            "".join(parts), pool, limit=self.max_recommendations
        )
        logger.info(f"Chat finished with {len(recommendations)} recommendations")
        if recommendations:
            yield ChatEvent(recommendations=[r.to_dict() for r in recommendations])
        yield ChatEvent(done=True)

    async def recommend_urls(self, interests: list[str], history: list[str]) -> list[str]:
        """Ask the model for related site URLs; returns [] if the call fails."""
        messages = [
            {"role": "system", "content": _RECOMMEND_URLS_PROMPT},
            {
                "role": "user",
                "content": f"用户兴趣: {', '.join(interests)}\n访问历史: {', '.join(history)}",
            },
        ]
        try:
            reply = await self.backend.complete(messages, model=self.model)
        except LLMError as e:
            logger.warning(f"Failed to recommend websites: {e}")
            return []
        return [line.strip() for line in reply.splitlines() if line.strip().startswith("http")]
