"""Data models for the analysis module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AnalysisResult:
    """Everything the add-website form needs after analyzing a URL."""

    url: str
    title: str
    description: str
    favicon: str
    category_id: str | None
    category_name: str
    category_icon: str
    tags: list[str] = field(default_factory=list)
    extracted_keywords: list[str] = field(default_factory=list)
    og_image: str | None = None
    site_name: str | None = None
    suggested_icon: str = ""
    similar_categories: list[str] = field(default_factory=list)
    is_new_category: bool = False
    source: str = "ai"  # "ai" | "rules"
    degraded: bool = False
    advisories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """camelCase payload for the web client."""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "favicon": self.favicon,
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "categoryIcon": self.category_icon,
            "tags": list(self.tags),
            "extractedKeywords": list(self.extracted_keywords),
            "ogImage": self.og_image,
            "siteName": self.site_name,
            "suggestedCategoryIcon": self.suggested_icon,
            "similarCategories": list(self.similar_categories),
            "isNewCategory": self.is_new_category,
            "source": self.source,
            "degraded": self.degraded,
            "advisories": list(self.advisories),
        }
