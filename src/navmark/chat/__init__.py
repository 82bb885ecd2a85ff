"""Streaming navigation chat with website recommendations."""

from navmark.chat.assistant import ChatAssistant
from navmark.chat.models import ChatEvent
from navmark.chat.recommend import MarkerFilter, extract_recommendations, strip_markers

__all__ = ["ChatAssistant", "ChatEvent", "MarkerFilter", "extract_recommendations", "strip_markers"]
