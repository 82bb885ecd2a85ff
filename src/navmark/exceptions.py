"""Unified exception hierarchy for navmark."""

from __future__ import annotations


class NavmarkError(Exception):
    """Base exception for all navmark errors."""


# Web
class WebFetchError(NavmarkError):
    """Failed to fetch web content."""


# LLM
class LLMError(NavmarkError):
    """Base exception for language-model backend operations."""


class UpstreamError(LLMError):
    """The model endpoint was unreachable or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# Classification
class ClassificationError(NavmarkError):
    """Model output could not be turned into a classification."""


# Categories
class CategoryError(NavmarkError):
    """Base exception for category store operations."""


class DuplicateCategoryError(CategoryError):
    """A category with the same name already exists."""


class CategoryNotFoundError(CategoryError):
    """No category with the given id."""


# Websites
class WebsiteNotFoundError(NavmarkError):
    """No website with the given id."""
