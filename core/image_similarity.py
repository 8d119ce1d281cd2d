# core/image_similarity.py

from config import ScoringConfig
from core.color_similarity import average_palette_similarity
from core.description_similarity import description_similarity
from core.models import ImageRecord, SimilarityBreakdown
from core.tag_similarity import tag_set_similarity

class ImageSimilarityScorer:
    """
    Combines tag, description and color similarity into one composite score
    """

    def __init__(self, config: ScoringConfig = None):
        self.config = config or ScoringConfig()

    def compare(self, target: ImageRecord, candidate: ImageRecord) -> SimilarityBreakdown:
        """
        Score a candidate against a target image

        The target's tags are the reference set for tag similarity, so
        argument order matters.
        """
        cfg = self.config

        tag_sim = tag_set_similarity(target.tags, candidate.tags)
        color_sim = average_palette_similarity(
            target.colors, candidate.colors, cfg.delta_e_scale
        )
        desc_sim = description_similarity(target.description or "",
                                          candidate.description or "")

        base = (tag_sim * cfg.tag_weight
                + desc_sim * cfg.description_weight
                + color_sim * cfg.color_weight)

        signals = sum([
            tag_sim > cfg.tag_signal_threshold,
            desc_sim > cfg.description_signal_threshold,
            color_sim > cfg.color_signal_threshold,
        ])
        if signals >= cfg.boost_min_signals:
            base *= cfg.boost_multiplier

        composite = min(1.0, max(0.0, base))

        return SimilarityBreakdown(
            tag=tag_sim,
            description=desc_sim,
            color=color_sim,
            composite=composite
        )

    def score(self, target: ImageRecord, candidate: ImageRecord) -> float:
        """Composite similarity in [0, 1]"""
        return self.compare(target, candidate).composite
