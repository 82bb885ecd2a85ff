"""Category reconciliation, similarity and icon normalization."""

from navmark.categories.icons import DEFAULT_ICON, IconRegistry, normalize
from navmark.categories.reconciler import CategoryReconciler, icon_for_category
from navmark.categories.similarity import (
    edit_similarity,
    keyword_overlap,
    levenshtein_distance,
    most_similar,
    name_similarity,
)

__all__ = [
    "DEFAULT_ICON",
    "IconRegistry",
    "normalize",
    "CategoryReconciler",
    "icon_for_category",
    "edit_similarity",
    "keyword_overlap",
    "levenshtein_distance",
    "most_similar",
    "name_similarity",
]
