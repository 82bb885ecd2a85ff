"""Category and website store interfaces with in-memory implementations."""

from navmark.store.base import CategoryStore, WebsiteStore
from navmark.store.memory import InMemoryCategoryStore, InMemoryWebsiteStore
from navmark.store.models import CategorySummary, WebsiteRecord

__all__ = [
    "CategoryStore",
    "WebsiteStore",
    "InMemoryCategoryStore",
    "InMemoryWebsiteStore",
    "CategorySummary",
    "WebsiteRecord",
]
