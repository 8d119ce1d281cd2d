# core/models.py

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Mapping, Optional, Tuple

@dataclass(frozen=True)
class ImageRecord:
    """
    An image together with its AI-derived metadata.

    Colors hold validated uppercase ``#RRGGBB`` strings, or ``None`` for a
    value that failed validation so it still counts as a zero-similarity
    comparison.
    """
    id: Hashable
    tags: Tuple[str, ...] = ()
    description: Optional[str] = None
    colors: Tuple[Optional[str], ...] = ()
    has_metadata: bool = True
    status: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class SearchFilters:
    """Query input: any combination of text, color and similar-to"""
    text_query: Optional[str] = None
    color: Optional[str] = None
    similar_to: Optional[Hashable] = None

    @property
    def is_empty(self) -> bool:
        has_text = bool(self.text_query and self.text_query.strip())
        return not has_text and not self.color and self.similar_to is None


@dataclass(frozen=True)
class SimilarityBreakdown:
    """Per-signal scores for one compared pair"""
    tag: float
    description: float
    color: float
    composite: float


@dataclass
class SearchResponse:
    """Container for search results"""
    images: List[ImageRecord]
    total_count: int

    @property
    def filtered_count(self) -> int:
        return len(self.images)
