"""Records exchanged with the category and website stores."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CategorySummary:
    """A category with its usage count derived from the website store."""

    id: str
    name: str
    icon: str
    count: int = 0
    sort_order: int = 0


@dataclass
class WebsiteRecord:
    """A saved website entry."""

    id: str
    url: str
    title: str
    description: str = ""
    category_id: str | None = None
    tags: list[str] = field(default_factory=list)
    favicon: str = ""
    visit_count: int = 0
    created_at: str = ""
    last_visited: str | None = None

    def to_dict(self) -> dict:
        """camelCase projection sent to the web client."""
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "category": self.category_id,
            "tags": list(self.tags),
            "favicon": self.favicon,
            "visitCount": self.visit_count,
            "createdAt": self.created_at,
            "lastVisited": self.last_visited,
        }
