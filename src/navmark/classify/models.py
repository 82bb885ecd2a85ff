"""Data models for the classify module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClassificationResult:
    """Category, tags and rewritten description for one website."""

    category: str
    tags: list[str] = field(default_factory=list)
    description: str = ""
    suggested_icon: str = ""
    source: str = "ai"  # "ai" | "rules"
    corrected_from: str | None = None  # model's own label before auto-correction
