"""The add-website pipeline: extract, classify, reconcile, resolve icons."""

from __future__ import annotations

import logging

from navmark.analysis.models import AnalysisResult
from navmark.categories import icons
from navmark.categories.icons import IconRegistry
from navmark.categories.reconciler import CategoryReconciler
from navmark.classify.ai import AIClassifier, match_existing
from navmark.classify.models import ClassificationResult
from navmark.classify.rules import classify_by_rules
from navmark.exceptions import CategoryError, ClassificationError, LLMError
from navmark.store.base import CategoryStore
from navmark.store.models import CategorySummary
from navmark.web.extractor import WebsiteExtractor
from navmark.web.favicon import FaviconResolver, is_placeholder

logger = logging.getLogger(__name__)

DEGRADED_EXTRACTION = "Page could not be fetched; results are based on the URL only."
RULES_FALLBACK = "AI analysis unavailable; category chosen by keyword rules."
CATEGORY_UNAVAILABLE = "Category could not be saved; pick one manually."


class WebsiteAnalyzer:
    """Analyze a URL into title, description, tags and a reconciled category.

    Never raises for fetch, model or store failures; problems are reported
    through ``AnalysisResult.advisories``.

    Args:
        categories: Category store.
        classifier: Model-backed classifier. Without one, rules are used.
        extractor: Page extractor.
        favicon_resolver: Used when the page yields no usable favicon.
        registry: Optional icon registry for validating suggested icons.
    """

    def __init__(
        self,
        categories: CategoryStore,
        classifier: AIClassifier | None = None,
        extractor: WebsiteExtractor | None = None,
        favicon_resolver: FaviconResolver | None = None,
        registry: IconRegistry | None = None,
    ):
        self.categories = categories
        self.classifier = classifier
        self.extractor = extractor or WebsiteExtractor()
        self.favicon_resolver = favicon_resolver or FaviconResolver()
        self.reconciler = CategoryReconciler(categories, registry=registry)

    def _ranked_categories(self) -> list[CategorySummary]:
        try:
            existing = self.categories.list_all()
        except CategoryError as e:
            logger.warning(f"Could not list categories: {e}")
            return []
        return sorted(existing, key=lambda c: c.count, reverse=True)

    async def classify(
        self,
        url: str,
        title: str,
        description: str,
        keywords: list[str] | None = None,
        existing: list[CategorySummary] | None = None,
        page_content: str | None = None,
    ) -> ClassificationResult:
        """Classify known metadata; falls back to rules on any model problem."""
        if existing is None:
            existing = self._ranked_categories()

        if self.classifier is not None:
            try:
                return await self.classifier.classify(
                    url, title, description, keywords, existing, page_content
                )
            except (LLMError, ClassificationError) as e:
                logger.warning(f"AI classification failed for {url}, using rules: {e}")

        result = classify_by_rules(url, title, description, keywords)
        if existing:
            replacement = match_existing(result.category, existing)
            if replacement and replacement != result.category:
                logger.info(f"Corrected rule category '{result.category}' -> '{replacement}'")
                result.corrected_from, result.category = result.category, replacement
        return result

    async def analyze(self, url: str) -> AnalysisResult:
        logger.info(f"Analyzing website: {url}")
        advisories: list[str] = []
        existing = self._ranked_categories()

        info = await self.extractor.extract(url)
        if info.degraded:
            advisories.append(DEGRADED_EXTRACTION)

        classification = await self.classify(
            info.url,
            info.title,
            info.description,
            info.keywords,
            existing,
            info.page_content,
        )
        if classification.source == "rules" and self.classifier is not None:
            advisories.append(RULES_FALLBACK)

        icon = icons.normalize(classification.suggested_icon) if classification.suggested_icon else ""
        category: CategorySummary | None = None
        created = False
        try:
            category, created = self.reconciler.get_or_create(classification.category, icon or None)
        except CategoryError as e:
            logger.warning(f"Category reconciliation failed for '{classification.category}': {e}")
            advisories.append(CATEGORY_UNAVAILABLE)

        favicon = info.favicon
        if is_placeholder(favicon):
            favicon = await self.favicon_resolver.resolve_high_quality(info.url)

        try:
            similar = self.reconciler.suggest_similar(classification.category)
        except CategoryError as e:
            logger.warning(f"Similar-category lookup failed: {e}")
            similar = []

        result = AnalysisResult(
            url=info.url,
            title=info.title,
            description=classification.description,
            favicon=favicon,
            category_id=category.id if category else None,
            category_name=category.name if category else classification.category,
            category_icon=category.icon if category else (icon or icons.DEFAULT_ICON),
            tags=list(classification.tags),
            extracted_keywords=list(info.keywords),
            og_image=info.og_image,
            site_name=info.site_name,
            suggested_icon=icon,
            similar_categories=similar,
            is_new_category=created,
            source=classification.source,
            degraded=info.degraded,
            advisories=advisories,
        )
        logger.info(f"Analysis finished: {result.title} -> {result.category_name}")
        return result
