"""Website classification: model-backed with a rule-based fallback."""

from navmark.classify.ai import AIClassifier, match_existing, parse_classification
from navmark.classify.models import ClassificationResult
from navmark.classify.rules import category_from_domain, classify_by_rules

__all__ = [
    "AIClassifier",
    "ClassificationResult",
    "classify_by_rules",
    "category_from_domain",
    "match_existing",
    "parse_classification",
]
