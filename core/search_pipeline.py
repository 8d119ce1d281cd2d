# core/search_pipeline.py

import logging
from functools import partial
from typing import Hashable, List, Optional, Sequence, Tuple

from config import SearchConfig, SystemConfig
from core.batch_processor import BatchProcessor
from core.color_similarity import max_color_similarity
from core.image_similarity import ImageSimilarityScorer
from core.models import ImageRecord, SearchFilters, SearchResponse, SimilarityBreakdown

logger = logging.getLogger(__name__)

def _check_threshold(name: str, value: float):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1].")

class SearchPipeline:
    """
    Text, color and find-similar filtering over an in-memory image collection.

    Stages run in a fixed order (text, then color, then similarity) and each
    runs only when its filter is set. Every call is a full scan; nothing is
    kept between calls.
    """

    def __init__(self,
                 config: SearchConfig = None,
                 scorer: ImageSimilarityScorer = None,
                 batch_processor: BatchProcessor = None,
                 parallel_min_candidates: int = 500,
                 use_threading: bool = False):
        self.config = config or SearchConfig()
        self.scorer = scorer or ImageSimilarityScorer(self.config.scoring)
        self.batch_processor = batch_processor
        self.parallel_min_candidates = parallel_min_candidates
        self.use_threading = use_threading

    @classmethod
    def from_system_config(cls, config: SystemConfig) -> 'SearchPipeline':
        """Build a pipeline from the application-wide configuration"""
        batch_processor = None
        if config.n_workers > 1:
            batch_processor = BatchProcessor(n_workers=config.n_workers)
        return cls(
            config=config.search,
            batch_processor=batch_processor,
            parallel_min_candidates=config.parallel_min_candidates,
            use_threading=config.use_threading
        )

    def filter_by_text(self, images: Sequence[ImageRecord], query: str) -> List[ImageRecord]:
        """
        Keep images whose tags or description contain the query (case-insensitive)

        An empty or whitespace-only query keeps everything.
        """
        if not query or not query.strip():
            return list(images)

        needle = query.lower().strip()

        def matches(image: ImageRecord) -> bool:
            if not image.has_metadata:
                return False
            if any(needle in tag.lower() for tag in image.tags):
                return True
            return needle in (image.description or "").lower()

        return [image for image in images if matches(image)]

    def filter_by_color(self,
                        images: Sequence[ImageRecord],
                        target_color: str,
                        threshold: float = None) -> List[ImageRecord]:
        """
        Keep images with a palette color close to target_color

        Returns:
            Matching images, closest first
        """
        if threshold is None:
            threshold = self.config.color_threshold
        _check_threshold("color threshold", threshold)
        # Same ΔE scale as the composite score's color signal
        scale = self.scorer.config.delta_e_scale

        matched = []
        for image in images:
            if not image.has_metadata or not image.colors:
                continue
            best = max_color_similarity(target_color, image.colors, scale)
            if best >= threshold:
                matched.append((image, best))

        matched.sort(key=lambda item: item[1], reverse=True)
        return [image for image, _ in matched]

    def rank_similar(self,
                     images: Sequence[ImageRecord],
                     target: ImageRecord,
                     limit: int = None,
                     threshold: float = None) -> List[Tuple[ImageRecord, SimilarityBreakdown]]:
        """
        Score every other image against target and keep the best matches

        Args:
            images: Candidate images
            target: Image to find similar ones for
            limit: Maximum number of results
            threshold: Minimum composite similarity

        Returns:
            (image, breakdown) pairs sorted by composite score, highest first
        """
        if limit is None:
            limit = self.config.result_limit
        if threshold is None:
            threshold = self.config.similarity_threshold
        if limit < 0:
            raise ValueError("limit must not be negative.")
        _check_threshold("similarity threshold", threshold)

        if not target.has_metadata:
            return []

        candidates = [
            image for image in images
            if image.id != target.id and image.has_metadata
        ]

        breakdowns = self._score_candidates(target, candidates)

        ranked = [
            (image, breakdown)
            for image, breakdown in zip(candidates, breakdowns)
            if breakdown.composite >= threshold
        ]
        ranked.sort(key=lambda item: item[1].composite, reverse=True)

        logger.debug("Similarity stage kept %d of %d candidates for %r",
                     len(ranked), len(candidates), target.id)
        return ranked[:limit]

    def find_similar(self,
                     images: Sequence[ImageRecord],
                     target: ImageRecord,
                     limit: int = None,
                     threshold: float = None) -> List[ImageRecord]:
        """Images most similar to target, best first"""
        return [image for image, _ in self.rank_similar(images, target, limit, threshold)]

    def search(self, images: Sequence[ImageRecord], filters: SearchFilters) -> List[ImageRecord]:
        """
        Apply every filter present in filters, in pipeline order

        With no filters the collection comes back unchanged.
        """
        if filters.is_empty:
            return list(images)

        filtered = list(images)

        if filters.text_query:
            filtered = self.filter_by_text(filtered, filters.text_query)
            logger.debug("Text filter %r kept %d images", filters.text_query, len(filtered))

        if filters.color:
            filtered = self.filter_by_color(filtered, filters.color)
            logger.debug("Color filter %s kept %d images", filters.color, len(filtered))

        if filters.similar_to is not None:
            # Target comes from the full collection, not the filtered one
            target = self._find_by_id(images, filters.similar_to)
            if target is None:
                logger.debug("Similar-to target %r not found", filters.similar_to)
                return []
            filtered = self.find_similar(filtered, target)

        return filtered

    def run(self, images: Sequence[ImageRecord], filters: SearchFilters) -> SearchResponse:
        """Search and report the result together with the collection size"""
        return SearchResponse(images=self.search(images, filters), total_count=len(images))

    def _score_candidates(self, target: ImageRecord,
                          candidates: List[ImageRecord]) -> List[SimilarityBreakdown]:
        if (self.batch_processor is not None
                and len(candidates) >= self.parallel_min_candidates):
            logger.debug("Scoring %d candidates in parallel", len(candidates))
            return self.batch_processor.map(
                partial(self.scorer.compare, target),
                candidates,
                use_threading=self.use_threading
            )
        return [self.scorer.compare(target, candidate) for candidate in candidates]

    @staticmethod
    def _find_by_id(images: Sequence[ImageRecord], image_id: Hashable) -> Optional[ImageRecord]:
        for image in images:
            if image.id == image_id:
                return image
        return None
