"""In-memory stores, used by tests and single-process deployments."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone

from navmark.exceptions import CategoryNotFoundError, DuplicateCategoryError, WebsiteNotFoundError
from navmark.store.base import CategoryStore, WebsiteStore
from navmark.store.models import CategorySummary, WebsiteRecord

logger = logging.getLogger(__name__)

_WEBSITE_FIELDS = {
    "url", "title", "description", "category_id", "tags", "favicon",
    "visit_count", "last_visited",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryWebsiteStore(WebsiteStore):
    def __init__(self, records: list[WebsiteRecord] | None = None):
        self._lock = threading.Lock()
        self._rows: dict[str, WebsiteRecord] = {}
        for record in records or []:
            self.create(record)

    def list_all(self) -> list[WebsiteRecord]:
        with self._lock:
            return [replace(r, tags=list(r.tags)) for r in self._rows.values()]

    def get(self, website_id: str) -> WebsiteRecord | None:
        with self._lock:
            row = self._rows.get(website_id)
            return replace(row, tags=list(row.tags)) if row else None

    def create(self, record: WebsiteRecord) -> WebsiteRecord:
        row = replace(
            record,
            id=record.id or uuid.uuid4().hex,
            tags=list(record.tags),
            created_at=record.created_at or _now(),
        )
        with self._lock:
            self._rows[row.id] = row
        return replace(row, tags=list(row.tags))

    def update(self, website_id: str, **fields) -> WebsiteRecord:
        unknown = set(fields) - _WEBSITE_FIELDS
        if unknown:
            raise ValueError(f"Unknown website fields: {sorted(unknown)}")
        with self._lock:
            row = self._rows.get(website_id)
            if row is None:
                raise WebsiteNotFoundError(f"Website not found: {website_id}")
            row = replace(row, **fields)
            self._rows[website_id] = row
        return replace(row, tags=list(row.tags))

    def delete(self, website_id: str) -> None:
        with self._lock:
            if self._rows.pop(website_id, None) is None:
                raise WebsiteNotFoundError(f"Website not found: {website_id}")

    def record_visit(self, website_id: str) -> WebsiteRecord:
        with self._lock:
            row = self._rows.get(website_id)
            if row is None:
                raise WebsiteNotFoundError(f"Website not found: {website_id}")
            row = replace(row, visit_count=row.visit_count + 1, last_visited=_now())
            self._rows[website_id] = row
        return replace(row, tags=list(row.tags))


class InMemoryCategoryStore(CategoryStore):
    """Category table whose counts are derived from a website store."""

    def __init__(self, websites: WebsiteStore | None = None):
        self._lock = threading.Lock()
        self._rows: dict[str, CategorySummary] = {}
        self._websites = websites

    def _counts(self) -> Counter:
        if self._websites is None:
            return Counter()
        return Counter(w.category_id for w in self._websites.list_all())

    def _with_count(self, row: CategorySummary, counts: Counter) -> CategorySummary:
        return replace(row, count=counts.get(row.id, 0))

    def list_all(self) -> list[CategorySummary]:
        counts = self._counts()
        with self._lock:
            # dicts keep insertion order, so ties fall back to creation order
            rows = sorted(self._rows.values(), key=lambda r: r.sort_order)
            return [self._with_count(r, counts) for r in rows]

    def get(self, category_id: str) -> CategorySummary | None:
        counts = self._counts()
        with self._lock:
            row = self._rows.get(category_id)
            return self._with_count(row, counts) if row else None

    def find_by_name(self, name: str) -> CategorySummary | None:
        key = name.strip().casefold()
        counts = self._counts()
        with self._lock:
            for row in self._rows.values():
                if row.name.casefold() == key:
                    return self._with_count(row, counts)
        return None

    def create(self, name: str, icon: str, sort_order: int) -> CategorySummary:
        name = name.strip()
        with self._lock:
            if any(r.name.casefold() == name.casefold() for r in self._rows.values()):
                raise DuplicateCategoryError(f"Category with this name already exists: {name}")
            row = CategorySummary(id=uuid.uuid4().hex, name=name, icon=icon, sort_order=sort_order)
            self._rows[row.id] = row
        return replace(row)

    def update(self, category_id: str, name: str | None = None, icon: str | None = None) -> CategorySummary:
        with self._lock:
            row = self._rows.get(category_id)
            if row is None:
                raise CategoryNotFoundError(f"Category not found: {category_id}")
            if name and any(
                r.id != category_id and r.name.casefold() == name.casefold()
                for r in self._rows.values()
            ):
                raise DuplicateCategoryError(f"Category with this name already exists: {name}")
            row = replace(row, name=name or row.name, icon=icon or row.icon)
            self._rows[category_id] = row
        return self.get(category_id)

    def delete(self, category_id: str) -> None:
        with self._lock:
            if self._rows.pop(category_id, None) is None:
                raise CategoryNotFoundError(f"Category not found: {category_id}")

    def max_sort_order(self) -> int | None:
        with self._lock:
            if not self._rows:
                return None
            return max(r.sort_order for r in self._rows.values())

    def set_sort_order(self, category_ids: list[str]) -> None:
        with self._lock:
            missing = [cid for cid in category_ids if cid not in self._rows]
            if missing:
                raise CategoryNotFoundError(f"Category not found: {missing[0]}")
            for index, cid in enumerate(category_ids):
                self._rows[cid] = replace(self._rows[cid], sort_order=index)
        logger.info(f"Reordered {len(category_ids)} categories")
