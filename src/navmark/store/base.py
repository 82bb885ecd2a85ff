"""Abstract interfaces for the category and website stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from navmark.store.models import CategorySummary, WebsiteRecord


class CategoryStore(ABC):
    """Persistent category table. Implementations must be safe for concurrent use."""

    @abstractmethod
    def list_all(self) -> list[CategorySummary]:
        """All categories ordered by sort order, counts filled in."""
        ...

    @abstractmethod
    def get(self, category_id: str) -> CategorySummary | None:
        ...

    @abstractmethod
    def find_by_name(self, name: str) -> CategorySummary | None:
        """Case-insensitive exact-name lookup."""
        ...

    @abstractmethod
    def create(self, name: str, icon: str, sort_order: int) -> CategorySummary:
        """Insert a category. Raises DuplicateCategoryError on a name conflict."""
        ...

    @abstractmethod
    def update(self, category_id: str, name: str | None = None, icon: str | None = None) -> CategorySummary:
        ...

    @abstractmethod
    def delete(self, category_id: str) -> None:
        ...

    @abstractmethod
    def max_sort_order(self) -> int | None:
        """Largest sort order in use, or None for an empty table."""
        ...

    @abstractmethod
    def set_sort_order(self, category_ids: list[str]) -> None:
        """Give ``category_ids[i]`` sort order ``i``."""
        ...


class WebsiteStore(ABC):
    """Persistent website table."""

    @abstractmethod
    def list_all(self) -> list[WebsiteRecord]:
        ...

    @abstractmethod
    def get(self, website_id: str) -> WebsiteRecord | None:
        ...

    @abstractmethod
    def create(self, record: WebsiteRecord) -> WebsiteRecord:
        ...

    @abstractmethod
    def update(self, website_id: str, **fields) -> WebsiteRecord:
        ...

    @abstractmethod
    def delete(self, website_id: str) -> None:
        ...

    @abstractmethod
    def record_visit(self, website_id: str) -> WebsiteRecord:
        """Increment the visit count and stamp the visit time."""
        ...
